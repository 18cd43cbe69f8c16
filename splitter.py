import logging
import os
from pathlib import Path
from typing import Callable, List, Optional

import PyPDF2

from errors import SplitError, SplitException
from metanize import metanize
from registry import DocumentRegistry
from settings import SplitConfig, SplitDoc, is_blank, load_config

logger = logging.getLogger(__name__)


def range_is_valid(start: int, end: int, page_count: int) -> bool:
    """1-based inclusive range check against a document's page count."""
    return start > 0 and end > 0 and end >= start and end <= page_count


def copy_page_range(reader: PyPDF2.PdfReader, output_path, start_page: int, end_page: int):
    """Write pages start_page..end_page (1-based, inclusive) of reader to output_path."""
    with open(output_path, 'wb') as outfile:
        writer = PyPDF2.PdfWriter()

        # Extract pages (making end_page inclusive)
        for i in range(start_page - 1, end_page):
            writer.add_page(reader.pages[i])

        writer.write(outfile)


def validate_entry(entry: SplitDoc, registry: DocumentRegistry):
    """
    Run the ordered checks for one configuration entry.

    Stops at the first failing check and raises SplitException with its code.
    A passing entry leaves its source document opened in the registry.
    """
    path = entry.input_file
    checks = (
        (lambda: not is_blank(path), SplitError.ConfDocMissingInput),
        (lambda: os.path.isfile(path), SplitError.ConfDocInputNotFound),
        (lambda: registry.ensure(path), SplitError.InputError),
        (lambda: range_is_valid(*entry.invoice_range, registry.page_count(path)),
         SplitError.ConfDocInvalidInvRange),
        (lambda: range_is_valid(*entry.depth_range, registry.page_count(path)),
         SplitError.ConfDocInvalidDepthRange),
    )

    for is_ok, err in checks:
        if not is_ok():
            raise SplitException(err, f"{err.name}: {path!r}")


def emit_entry(entry: SplitDoc, registry: DocumentRegistry, config: SplitConfig,
               out_dir: Path, path_guard: Optional[Callable[[Path], Path]] = None) -> List[Path]:
    """
    Write one output document per non-blank mask of a validated entry.

    path_guard, when given, receives each output path before the file is
    created and returns the path to write to, or raises to refuse it.
    """
    reader = registry.get(entry.input_file)
    metadata = entry.metadata()
    written = []

    for mask, (start, end) in ((config.split_inv_name, entry.invoice_range),
                               (config.split_depth_name, entry.depth_range)):
        if is_blank(mask):
            continue

        output_path = out_dir / metanize(mask, metadata)
        if path_guard is not None:
            output_path = path_guard(output_path)
        copy_page_range(reader, output_path, start, end)
        logger.info("Wrote pages %d-%d of %s to %s", start, end, entry.input_file, output_path)
        written.append(output_path)

    return written


def split_documents(config: SplitConfig, registry: DocumentRegistry,
                    path_guard: Optional[Callable[[Path], Path]] = None) -> List[Path]:
    """
    Validate and emit every entry of config, in order.

    Each entry is emitted as soon as it validates, so a failure in a later
    entry leaves the outputs of earlier entries on disk.
    """
    if is_blank(config.split_inv_name) and is_blank(config.split_depth_name):
        raise SplitException(SplitError.SplitMaskMissing)

    out_dir = config.output_dir()
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for entry in config.split_docs:
        validate_entry(entry, registry)
        written.extend(emit_entry(entry, registry, config, out_dir, path_guard))

    return written


def run(config_path) -> SplitError:
    """Run a split job from a configuration file and return its exit code."""
    try:
        config = load_config(config_path)
        with DocumentRegistry() as registry:
            split_documents(config, registry)
        return SplitError.Ok
    except SplitException as e:
        logger.warning("Split aborted: %s", e)
        return e.error
    except Exception:
        logger.exception("Unexpected failure while splitting %s", config_path)
        return SplitError.Unk
