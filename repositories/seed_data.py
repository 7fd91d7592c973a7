"""
Example holdings written on first start, when no asset collection exists yet.
"""

from typing import List

from models import Asset

DEFAULT_ASSETS = [
    {"id": "1", "name": "华泰柏瑞中证红利低波动ETF联接C", "code": "007467", "investment_direction": "红利",
     "target_amount": 10000, "cost_basis": 4978.04, "current_value": 5060.35},
    {"id": "2", "name": "平安鑫瑞混合C", "code": "011762", "investment_direction": "债券",
     "target_amount": 20000, "cost_basis": 1007.76, "current_value": 1012.24},
    {"id": "3", "name": "国泰黄金ETF联接C", "code": "004253", "investment_direction": "黄金",
     "target_amount": 50000, "cost_basis": 4557.71, "current_value": 4602.61},
    {"id": "4", "name": "天弘沪深300ETF联接C", "code": "005918", "investment_direction": "宽基指数",
     "target_amount": 10000, "cost_basis": 3841.62, "current_value": 3831.85},
    {"id": "5", "name": "富国中证A500ETF联接C", "code": "022464", "investment_direction": "宽基指数",
     "target_amount": 10000, "cost_basis": 1000.00, "current_value": 974.33},
    {"id": "6", "name": "天弘创业板ETF联接C", "code": "001593", "investment_direction": "宽基指数",
     "target_amount": 5000, "cost_basis": 3771.44, "current_value": 3628.89},
    {"id": "7", "name": "南方恒生ETF联接C", "code": "005659", "investment_direction": "宽基指数",
     "target_amount": 5000, "cost_basis": 1000.00, "current_value": 946.07},
    {"id": "8", "name": "创金合信全球芯片产业股票(QDII)C", "code": "017654", "investment_direction": "全球芯片",
     "target_amount": 10000, "cost_basis": 700.00, "current_value": 700.00},
    {"id": "9", "name": "富国全球消费精选混合(QDII)C", "code": "012062", "investment_direction": "全球消费",
     "target_amount": 5000, "cost_basis": 1898.03, "current_value": 1873.04},
    {"id": "10", "name": "银华海外数字经济量化选股混合(QDII)C", "code": "016702", "investment_direction": "海外科技",
     "target_amount": 5000, "cost_basis": 1698.08, "current_value": 1740.85},
]


def default_assets() -> List[Asset]:
    """Fresh Asset instances for the seed set."""
    return [Asset.model_validate(row) for row in DEFAULT_ASSETS]
