# svg2png/conversion/driver.py
"""
Converts a directory of SVG icons to PNG.

Every file goes through the same states:
DISCOVERED -> DIMENSIONS_READ -> SIZE_RESOLVED -> RENDERED -> CLASSIFIED
-> ENCODED -> SAVED, or FAILED from any of them. Files are independent: a
failure is logged with the file name and the batch continues.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from svg2png.config import LOG_PREFIX, OUTPUT_EXTENSION, SOURCE_EXTENSION
from svg2png.conversion.encoder import encode
from svg2png.conversion.pixels import classify_for_format, transform_rows
from svg2png.conversion.rasterizer import CairoRasterizer
from svg2png.sizing.policy import AdjustedSize, resolve
from svg2png.utils.error_handling import (
    ConversionError,
    DirectoryError,
    EncodeError,
    EncodeErrorKind,
    SourceReadError,
    Svg2PngError,
)

logger = logging.getLogger(__name__)


class ConversionState(Enum):
    DISCOVERED = "discovered"
    DIMENSIONS_READ = "dimensions_read"
    SIZE_RESOLVED = "size_resolved"
    RENDERED = "rendered"
    CLASSIFIED = "classified"
    ENCODED = "encoded"
    SAVED = "saved"
    FAILED = "failed"


@dataclass
class ConversionResult:
    """Outcome of converting one SVG file."""
    source: Path
    output: Path
    state: ConversionState = ConversionState.DISCOVERED
    size: Optional[AdjustedSize] = None
    grayscale: Optional[bool] = None
    error: Optional[Svg2PngError] = None
    # State reached before failing, for reporting
    failed_in: Optional[ConversionState] = None

    @property
    def saved(self) -> bool:
        return self.state is ConversionState.SAVED

    @property
    def skipped(self) -> bool:
        """Failed because the SVG declared no usable size; not counted as an error."""
        return self.state is ConversionState.FAILED and isinstance(self.error, SourceReadError)

    def fail(self, error: Svg2PngError) -> "ConversionResult":
        self.failed_in = self.state
        self.state = ConversionState.FAILED
        self.error = error
        return self


@dataclass
class BatchReport:
    results: List[ConversionResult] = field(default_factory=list)
    cancelled: int = 0

    @property
    def saved(self) -> int:
        return sum(1 for r in self.results if r.saved)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.skipped)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.state is ConversionState.FAILED and not r.skipped)


def find_sources(source_dir) -> List[Path]:
    """Lists the *.svg files of a directory (extension matched case-insensitively), sorted by name."""
    source_dir = Path(source_dir)
    if not source_dir.is_dir():
        return []
    return sorted(
        p for p in source_dir.iterdir()
        if p.is_file() and p.suffix.lower() == SOURCE_EXTENSION
    )


def output_path_for(source, target_dir) -> Path:
    return Path(target_dir) / Path(source).with_suffix(OUTPUT_EXTENSION).name


def convert_file(source, target_dir, config, rasterizer=None) -> ConversionResult:
    """
    Converts one SVG file into a PNG in ``target_dir``.

    Args:
        source (str | Path): The SVG file.
        target_dir (str | Path): Existing output directory.
        config (ResolvedConfiguration): Options shared read-only by all files.
        rasterizer: Object with read_intrinsic_size(path) and render(descriptor, size).
                    Defaults to a CairoRasterizer.

    Returns:
        ConversionResult: Final state; per-file errors are recorded, not raised.
    """
    rasterizer = rasterizer or CairoRasterizer()
    source = Path(source)
    result = ConversionResult(source=source, output=output_path_for(source, target_dir))

    try:
        descriptor = rasterizer.read_intrinsic_size(source)
        result.state = ConversionState.DIMENSIONS_READ

        result.size = resolve(descriptor.size, config)
        result.state = ConversionState.SIZE_RESOLVED

        buffer = rasterizer.render(descriptor, result.size)
        result.state = ConversionState.RENDERED

        result.grayscale = classify_for_format(buffer, config.output_format)
        result.state = ConversionState.CLASSIFIED

        encode(
            result.output,
            result.size,
            transform_rows(buffer, config.output_format),
            grayscale=result.grayscale,
            mode=config.image_mode,
        )
        result.state = ConversionState.ENCODED

        if not result.output.is_file():
            raise EncodeError(f"{result.output} missing after write", EncodeErrorKind.IO_ERROR)
        result.state = ConversionState.SAVED
    except SourceReadError as e:
        logger.warning(f"{LOG_PREFIX}: Failed to read default size, skipping file {source.name}: {e.message}")
        return result.fail(e)
    except ConversionError as e:
        logger.error(f"{LOG_PREFIX}: Failed to save {result.output} ({source.name}): {e.message}")
        return result.fail(e)
    except Exception as e:
        # Unexpected errors still fail only this file
        logger.error(f"{LOG_PREFIX}: Unexpected error converting {source.name}: {e}", exc_info=True)
        error = ConversionError(f"Unexpected error converting {source.name}: {e}")
        error.__cause__ = e
        return result.fail(error)

    logger.debug(
        f"{LOG_PREFIX}: Saved {result.output} {result.size.width}x{result.size.height}"
        + (" [grayscale]" if result.grayscale else "")
    )
    return result


def prepare_target_dir(target_dir) -> Path:
    """Creates the target directory and its parents. Raises DirectoryError on failure."""
    target_dir = Path(target_dir)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryError(f"Could not create target directory {target_dir}: {e}") from e
    return target_dir


def convert_directory(source_dir, target_dir, config, jobs: int = 1, progress: bool = True,
                      cancel: Optional[threading.Event] = None, rasterizer=None) -> BatchReport:
    """
    Converts every SVG in ``source_dir``.

    Args:
        source_dir (str | Path): Directory containing *.svg files.
        target_dir (str | Path): Output directory, created if missing.
        config (ResolvedConfiguration): Frozen options shared by all conversions.
        jobs (int): Number of worker threads; 1 converts sequentially.
        progress (bool): Show a tqdm progress bar.
        cancel (threading.Event, optional): When set, files not yet started are skipped.
        rasterizer: Rendering backend passed to convert_file().

    Returns:
        BatchReport: One result per started file plus the number of cancelled files.

    Raises:
        DirectoryError: If the target directory cannot be created.
    """
    sources = find_sources(source_dir)
    if not sources:
        logger.warning(f"{LOG_PREFIX}: No SVG files found in {source_dir}")
        return BatchReport()

    target_dir = prepare_target_dir(target_dir)
    rasterizer = rasterizer or CairoRasterizer()
    report = BatchReport()

    def run(source):
        if cancel is not None and cancel.is_set():
            return None
        return convert_file(source, target_dir, config, rasterizer)

    bar = tqdm(total=len(sources), desc=LOG_PREFIX, unit="file", disable=not progress)
    try:
        if jobs <= 1:
            outcomes = []
            for source in sources:
                outcomes.append(run(source))
                bar.update(1)
        else:
            outcomes = [None] * len(sources)
            with ThreadPoolExecutor(max_workers=jobs) as executor:
                futures = {executor.submit(run, source): index for index, source in enumerate(sources)}
                for future in as_completed(futures):
                    outcomes[futures[future]] = future.result()
                    bar.update(1)
    finally:
        bar.close()

    for outcome in outcomes:
        if outcome is None:
            report.cancelled += 1
        else:
            report.results.append(outcome)

    logger.info(
        f"{LOG_PREFIX}: {report.saved} saved, {report.skipped} skipped, {report.failed} failed"
        + (f", {report.cancelled} cancelled" if report.cancelled else "")
        + f" (target: {target_dir})"
    )
    return report
