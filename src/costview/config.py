from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import SimpleNamespace
from typing import Mapping, Optional


_BOOLEAN_TRUE = {"1", "true", "yes", "on"}
DEFAULT_ENCODING = "utf-8-sig"


@dataclass(frozen=True)
class Config:
    """Runtime configuration assembled from environment variables and CLI options."""

    base_dir: Path
    dataset_path: Path
    output_path: Optional[Path]
    encoding: str = DEFAULT_ENCODING
    verbose: bool = False


def _to_path(value: object | None) -> Optional[Path]:
    if value is None:
        return None
    if isinstance(value, Path):
        return value.expanduser().resolve()
    text = str(value).strip()
    if not text:
        return None
    return Path(text).expanduser().resolve()


def _to_text(value: object | None) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _flag(value: object | None) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _BOOLEAN_TRUE


def _namespace(cli_args: object | None) -> SimpleNamespace:
    if cli_args is None:
        return SimpleNamespace()
    if isinstance(cli_args, SimpleNamespace):
        return cli_args
    if hasattr(cli_args, "__dict__"):
        return SimpleNamespace(**{k: v for k, v in vars(cli_args).items()})
    return SimpleNamespace()


def load_config(env: Mapping[str, str], cli_args: object | None = None) -> Config:
    """Build a runtime :class:`Config` from environment variables and CLI options."""

    base_dir = Path(__file__).resolve().parents[2]
    default_dataset = (base_dir / "data_sample" / "mydata.csv").resolve()

    dataset_path = _to_path(env.get("COSTVIEW_DATASET")) or default_dataset
    output_path = _to_path(env.get("COSTVIEW_OUTPUT"))
    encoding = _to_text(env.get("COSTVIEW_ENCODING")) or DEFAULT_ENCODING
    verbose = _flag(env.get("COSTVIEW_VERBOSE"))

    cli_ns = _namespace(cli_args)
    if getattr(cli_ns, "dataset", None):
        dataset_path = _to_path(cli_ns.dataset) or dataset_path
    if getattr(cli_ns, "output", None):
        output_path = _to_path(cli_ns.output)
    if getattr(cli_ns, "encoding", None):
        encoding = _to_text(cli_ns.encoding) or encoding
    if getattr(cli_ns, "verbose", False):
        verbose = True

    return Config(
        base_dir=base_dir,
        dataset_path=dataset_path,
        output_path=output_path,
        encoding=encoding,
        verbose=verbose,
    )


__all__ = ["Config", "load_config"]
