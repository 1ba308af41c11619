"""
Encode the part folders of a sprite set into one palette + RLE JSON document.

Usage:
    partsrle --images-dir images/v0 --output src/image-data.json
    partsrle --folders 1-bodies 2-heads --seed-palette src/image-data.json --workers 4
"""
from __future__ import annotations
import argparse
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .collection import CollectionEncoder
from .config import EncoderSettings, load_settings
from .errors import DecodeError
from .logging_config import setup_logging
from .palette import PaletteRegistry
from .sources import PixelSource, read_png_image
from .storage import read_palette
from .utils import category_from_folder, image_name

logger = logging.getLogger(__name__)

Job = Tuple[Path, str, str]  # (fichero, nombre, categoría)


def list_jobs(images_dir: Path, folders: List[str]) -> List[Job]:
    jobs: List[Job] = []
    for folder in folders:
        folder_path = Path(images_dir) / folder
        if not folder_path.is_dir():
            raise FileNotFoundError(f"Folder not found: {folder_path}")
        category = category_from_folder(folder)
        files = sorted(p for p in folder_path.iterdir() if p.is_file())
        logger.info(f"{folder}: {len(files)} files -> category '{category}'")
        jobs.extend((p, image_name(p.name), category) for p in files)
    return jobs


def _decode_all(jobs: List[Job], workers: int) -> Iterator[Tuple[Job, Optional[PixelSource], Optional[Exception]]]:
    """Decodifica (en paralelo si workers > 1) pero entrega en el orden de jobs."""
    def load(job: Job):
        try:
            return job, read_png_image(job[0]), None
        except DecodeError as e:
            return job, None, e

    if workers <= 1:
        for job in jobs:
            yield load(job)
        return

    pool = ThreadPoolExecutor(max_workers=workers)
    try:
        yield from pool.map(load, jobs)
    finally:
        # si se aborta a medias no hay que esperar a las decodificaciones en cola
        pool.shutdown(wait=True, cancel_futures=True)


def encode_folders(settings: EncoderSettings) -> CollectionEncoder:
    seed = read_palette(settings.seed_palette) if settings.seed_palette else None
    encoder = CollectionEncoder(palette=PaletteRegistry(seed, max_size=settings.max_palette_size))

    jobs = list_jobs(settings.images_dir, settings.folders)
    skipped = 0
    decoded = _decode_all(jobs, settings.workers)
    try:
        for (path, name, category), source, error in decoded:
            if error is not None:
                if not settings.skip_invalid:
                    raise error
                logger.warning(f"Skipping {path}: {error}")
                skipped += 1
                continue
            encoder.encode_image(name, source, category or None)
            logger.debug(f"Encoded {category}/{name}")
    finally:
        decoded.close()

    logger.info(f"Encoded {len(encoder)} images, {len(encoder.palette)} palette entries, {skipped} skipped")
    return encoder


def run(settings: EncoderSettings, flatten: bool = False) -> Path:
    encoder = encode_folders(settings)
    return encoder.write_to_file(settings.output, bgcolors=settings.bgcolors, flatten=flatten)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Encode sprite part folders into palette-indexed RLE data.")
    ap.add_argument("--images-dir", type=Path, default=None, help="Root folder holding the part folders.")
    ap.add_argument("--output", type=Path, default=None, help="Output JSON path.")
    ap.add_argument("--folders", nargs="+", default=None, help="Part folders, in encoding order.")
    ap.add_argument("--bgcolors", nargs="+", default=None, help="Background colors written to the document.")
    ap.add_argument("--seed-palette", type=Path, default=None, help="Reuse the palette of an earlier output.")
    ap.add_argument("--workers", type=int, default=None, help="Threads used to decode images.")
    ap.add_argument("--skip-invalid", action="store_true", default=None, help="Log and skip undecodable images.")
    ap.add_argument("--flatten", action="store_true", help="Put every image under 'root'.")
    ap.add_argument("--env-file", type=Path, default=None, help=".env file with PARTSRLE_* settings.")
    ap.add_argument("--log-dir", type=Path, default=None)
    ap.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    settings = load_settings(
        env_file=args.env_file,
        images_dir=args.images_dir,
        output=args.output,
        folders=args.folders,
        bgcolors=args.bgcolors,
        seed_palette=args.seed_palette,
        workers=args.workers,
        skip_invalid=args.skip_invalid,
        log_dir=args.log_dir,
        log_level=args.log_level,
    )
    setup_logging(settings.log_dir, level=settings.log_level)
    logger.info("=== partsrle encode ===")

    try:
        out = run(settings, flatten=args.flatten)
    except Exception:
        logger.exception("Encoding failed, nothing written")
        raise
    logger.info(f"Done: {out}")


if __name__ == "__main__":
    main()
