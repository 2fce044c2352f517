# exporter.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "calcpad-export.txt"


def export_text(text, display, width=50):
    """Each document line padded to width, followed by its result (if it has one)."""
    exported = []
    for index, line in enumerate(text.split("\n")):
        result = display[index] if index < len(display) else ""
        if result:
            exported.append(f"{line.ljust(width)} {result}")
        else:
            exported.append(line)
    return "\n".join(exported)


def write_export(path, text, display, width=50):
    path = Path(path)
    path.write_text(export_text(text, display, width), encoding="utf-8")
    logger.info("Exported %d lines to %s", len(display), path)
    return path
