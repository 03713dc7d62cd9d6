"""YAML loading for the shipped defaults and user config files.

Usage:
    from icon_variants.utils import fs
    data = fs.load_yaml(Path(__file__).parent / "defaults.yaml")
"""

from pathlib import Path
from typing import Any, Dict, Union

import yaml


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Parse a YAML config file with ``yaml.safe_load``.

    Parameters
    ----------
    path : Union[str, Path]
        File to read.

    Returns
    -------
    Dict[str, Any]
        Document content, ``None`` when the file is empty.

    Raises
    ------
    FileNotFoundError
        The file does not exist.
    yaml.YAMLError
        The content is not valid YAML; the message names the file.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    text = path.read_text(encoding='utf-8')
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise yaml.YAMLError(f"Invalid YAML in {path}: {exc}") from exc
