"""Data-set processing: ``sets/*.xaml`` → ``<output>/<set>.ts``."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

from .emitter import DEFAULT_TYPES_MODULE
from .schema.registry import Registry
from .transformer import DEFAULT_DATA_CONTEXT_NAME, DEFAULT_FONT, emit_data_module
from .utils.logging import get_logger
from .xmltree import read_xml_file

logger = get_logger(__name__)

DATA_SET_SUFFIX = ".xaml"


class DataSetProcessor:
    """Sequential data-set generator with per-file error isolation."""

    def __init__(
        self,
        registry: Registry,
        indent_level: int = 2,
        types_module: str = DEFAULT_TYPES_MODULE,
        data_context_name: str = DEFAULT_DATA_CONTEXT_NAME,
        default_font: str = DEFAULT_FONT,
    ) -> None:
        self.registry = registry
        self.indent_level = indent_level
        self.types_module = types_module
        self.data_context_name = data_context_name
        self.default_font = default_font

    def process_file(self, data_path: Path, output_dir: Path) -> Path:
        """Transform one data set and write it next to the types module.

        Errors propagate; :meth:`process_directory` is where they are isolated.
        """
        logger.info(f"- reading {data_path.name}")
        root_tag, tree = read_xml_file(data_path)
        source = emit_data_module(
            self.registry,
            root_tag,
            tree,
            source_name=data_path.name,
            indent_level=self.indent_level,
            types_module=self.types_module,
            data_context_name=self.data_context_name,
            default_font=self.default_font,
        )
        output_dir.mkdir(parents=True, exist_ok=True)
        out_path = output_dir / f"{data_path.stem}.ts"
        logger.info(f"- writing {out_path.name}")
        out_path.write_text(source, encoding="utf-8")
        return out_path

    def process_directory(
        self,
        sets_dir: Path,
        output_dir: Path,
        set_name: Optional[str] = None,
        on_progress: Optional[Callable[[str, bool], None]] = None,
    ) -> dict[str, Any]:
        """Generate every data set in *sets_dir* (or just *set_name*).

        Args:
            sets_dir: Directory holding ``*.xaml`` data sets.
            output_dir: Directory for generated ``.ts`` files.
            set_name: Only process ``<set_name>.xaml``; a missing file raises
                ``FileNotFoundError``.
            on_progress: Callback(file_name, success) called after each file.

        Returns:
            Summary dict with keys: total, succeeded, failed, errors, written.
        """
        sets_dir = Path(sets_dir)
        output_dir = Path(output_dir)
        logger.info(f"Writing Data Sets to {output_dir}")

        if set_name:
            single = sets_dir / f"{set_name}{DATA_SET_SUFFIX}"
            if not single.is_file():
                raise FileNotFoundError(f"Data set not found: {single}")
            data_files = [single]
        else:
            data_files = sorted(
                p for p in sets_dir.iterdir() if p.is_file() and p.suffix == DATA_SET_SUFFIX
            )

        succeeded = 0
        failed = 0
        errors: list[dict[str, str]] = []
        written: list[str] = []

        for data_path in data_files:
            try:
                out_path = self.process_file(data_path, output_dir)
            except Exception as exc:
                failed += 1
                message = f"{type(exc).__name__}: {exc}"
                errors.append({"file": data_path.name, "error": message})
                logger.error(f"Failed to generate data set {data_path.name}: {message}")
                if on_progress:
                    on_progress(data_path.name, False)
                continue
            succeeded += 1
            written.append(str(out_path))
            if on_progress:
                on_progress(data_path.name, True)

        return {
            "total": len(data_files),
            "succeeded": succeeded,
            "failed": failed,
            "errors": errors,
            "written": written,
        }
