"""Configuration loading and merging."""

from __future__ import annotations

import logging
import os
import pathlib
import tomllib


logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"

_DEFAULTS: dict[str, object] = {
    "mode": None,
    "track_scheme": None,
    "album": False,
    "combined_album": False,
    "replaygain": True,
    "print": False,
    "metaflac": "metaflac",
    "review_file": ".tags",
    "tags": [],
}

_BOOL_KEYS = {"album", "combined_album", "replaygain", "print"}
_CHOICE_KEYS = {
    "mode": {"a", "b", "auto"},
    "track_scheme": {"a", "b", "c"},
}
_STR_KEYS = {"metaflac"}


def _config_dir() -> pathlib.Path:
    """Return the flactagger config directory."""
    base = pathlib.Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
    return base / "flactagger"


def load_config(config_dir: pathlib.Path | None = None) -> dict:
    """Load config.toml and return its contents as a dict.

    Returns {} if no file exists or on parse error.
    """
    if config_dir is None:
        config_dir = _config_dir()
    path = config_dir / CONFIG_FILENAME
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text())
    except (tomllib.TOMLDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Ignoring unreadable config file {path}: {e}")
        return {}


def merge_config_into_args(args, config: dict) -> None:
    """Three-layer merge: CLI > config > hardcoded defaults.

    Mutates *args* in place.
    """
    for key in _BOOL_KEYS:
        if getattr(args, key, None) is not None:
            continue
        cfg_val = config.get(key)
        if cfg_val is not None:
            setattr(args, key, bool(cfg_val))
        else:
            setattr(args, key, _DEFAULTS[key])

    # Choices: validate, fall back to the default on junk
    for key, choices in _CHOICE_KEYS.items():
        if getattr(args, key, None) is not None:
            continue
        cfg_val = config.get(key)
        if cfg_val in choices:
            setattr(args, key, cfg_val)
        else:
            if cfg_val is not None:
                logger.warning(f"Ignoring invalid {key} {cfg_val!r} in config")
            setattr(args, key, _DEFAULTS[key])

    for key in _STR_KEYS:
        if getattr(args, key, None) is None:
            setattr(args, key, str(config.get(key) or _DEFAULTS[key]))

    if getattr(args, "review_file", None) is None:
        args.review_file = pathlib.Path(str(config.get("review_file") or _DEFAULTS["review_file"])).expanduser()

    # Global tags: CLI first, then config
    cli_val = getattr(args, "tags", None) or []
    cfg_val = config.get("tags") or []
    args.tags = cli_val + list(cfg_val)
