"""System prompts for reminder drafting, stored as plain text beside this module."""
from pathlib import Path
import typing as t

PROMPTS_DIR = Path(__file__).resolve().parent


def load_prompt(prompt_name: str, prompts_dir: t.Optional[t.Union[str, Path]] = None) -> str:
    """Read ``<prompt_name>.txt`` and return its text with surrounding whitespace removed.

    :param prompt_name: File name without the .txt extension.
    :param prompts_dir: Directory to read from; defaults to this package.
    :raises FileNotFoundError: If no such prompt exists.
    """
    prompt_file = Path(prompts_dir or PROMPTS_DIR) / f"{prompt_name}.txt"
    if not prompt_file.is_file():
        raise FileNotFoundError(f"Prompt file not found: {prompt_file}")
    return prompt_file.read_text(encoding="utf-8").strip()
