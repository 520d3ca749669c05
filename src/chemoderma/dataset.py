"""Dataset loading: fetch the ontology tree from a file or URL.

Loading is the only operation that crosses an asynchronous boundary;
``load_tree_async`` runs the blocking fetch off the event loop.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import requests

from chemoderma.exceptions import DatasetLoadError

logger = logging.getLogger(__name__)

DEFAULT_DATASET = "chemoderma_tree.json"
DEFAULT_TIMEOUT = 10
USER_AGENT = "chemoderma-explorer"


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_tree(source: str | Path, timeout: float = DEFAULT_TIMEOUT) -> dict[str, Any]:
    """Load and parse a TreeNode JSON document.

    Args:
        source: Local path or ``http(s)://`` URL
        timeout: Request timeout in seconds (URLs only)

    Returns:
        The parsed root TreeNode object. Its structure is not validated
        here; the flattener does that.

    Raises:
        DatasetLoadError: The resource could not be read or is not a JSON object.
    """
    source = str(source)
    if is_url(source):
        data = _fetch_url(source, timeout)
    else:
        data = _read_file(source)

    if not isinstance(data, dict):
        raise DatasetLoadError(source, f"top-level JSON value is {type(data).__name__}, expected an object")

    logger.debug("Loaded dataset from %s", source)
    return data


async def load_tree_async(source: str | Path, timeout: float = DEFAULT_TIMEOUT) -> dict[str, Any]:
    """Async variant of :func:`load_tree`."""
    return await asyncio.to_thread(load_tree, source, timeout)


def _fetch_url(url: str, timeout: float) -> Any:
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise DatasetLoadError(url, f"timed out after {timeout}s") from e
    except requests.exceptions.RequestException as e:
        raise DatasetLoadError(url, str(e)) from e

    try:
        return response.json()
    except ValueError as e:
        raise DatasetLoadError(url, f"invalid JSON: {e}") from e


def _read_file(path: str) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise DatasetLoadError(path, e.strerror or str(e)) from e
    except (ValueError, RecursionError) as e:
        raise DatasetLoadError(path, f"invalid JSON: {e}") from e
