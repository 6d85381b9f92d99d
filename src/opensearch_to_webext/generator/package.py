"""Writes a composed bundle to disk and zips it into an .xpi."""

import json
import zipfile
from pathlib import Path

from opensearch_to_webext.generator.bundle import EngineBundle

# Fixed entry timestamp so identical input gives identical archives.
ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)


def write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def write_bundle(bundle: EngineBundle, staging_dir: Path) -> list[Path]:
    """Write manifest.json and every _locales/<tag>/messages.json.

    Returns the written paths.
    """
    written = [staging_dir / "manifest.json"]
    write_json(written[0], bundle.manifest)

    for locale, messages in bundle.locales.items():
        path = staging_dir / "_locales" / locale / "messages.json"
        write_json(path, messages)
        written.append(path)

    return written


def zip_directory(src_dir: Path, out_path: Path) -> Path:
    """Zip the contents of src_dir (not the directory itself) into out_path."""
    out_path.parent.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(out_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for path in sorted(src_dir.rglob("*")):
            if path.is_dir():
                continue
            info = zipfile.ZipInfo(path.relative_to(src_dir).as_posix(), date_time=ZIP_DATE_TIME)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = 0o644 << 16
            zf.writestr(info, path.read_bytes())

    return out_path
