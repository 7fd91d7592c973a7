"""
Prompts package for WealthFolio.
Contains the advisor persona and the advisory request templates.
"""

import os
from typing import Dict

# Cache for loaded prompts
_prompt_cache: Dict[str, str] = {}


def load_prompt(filename: str) -> str:
    """
    Load a prompt from a text file.

    Args:
        filename: Name of the prompt file (e.g., 'system_prompt_en.txt')

    Returns:
        Prompt content as string
    """
    if filename in _prompt_cache:
        return _prompt_cache[filename]

    # Get the directory where this file is located
    prompt_dir = os.path.dirname(os.path.abspath(__file__))
    filepath = os.path.join(prompt_dir, filename)

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
            _prompt_cache[filename] = content
            return content
    except FileNotFoundError:
        raise FileNotFoundError(f"Prompt file not found: {filepath}")
    except Exception as e:
        raise RuntimeError(f"Error loading prompt file {filename}: {e}")


def get_system_prompt(language: str = "zh") -> str:
    """
    Get the advisor persona for the specified language.

    Args:
        language: 'en' for English, 'zh' for Chinese
    """
    return load_prompt(f"system_prompt_{language}.txt")


def get_analysis_template(language: str = "zh") -> str:
    """Template with {holdings}, {transactions} and {directions} placeholders."""
    return load_prompt(f"portfolio_analysis_{language}.txt")


def get_category_template(language: str = "zh") -> str:
    """Template with a {fund_name} placeholder."""
    return load_prompt(f"category_suggestion_{language}.txt")
