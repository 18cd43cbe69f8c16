import logging
from typing import BinaryIO, Dict, Tuple

import PyPDF2

logger = logging.getLogger(__name__)


class DocumentRegistry:
    """
    Opened source PDFs keyed by path, case-insensitively.

    Handles are opened once and kept for the lifetime of the registry. Only
    successful opens are cached, so a path that failed to open is retried the
    next time it is ensured.
    """

    def __init__(self):
        self._docs: Dict[str, Tuple[BinaryIO, PyPDF2.PdfReader]] = {}
        self._opens = 0

    @staticmethod
    def _key(path) -> str:
        return str(path).casefold()

    @property
    def open_count(self) -> int:
        """Number of open attempts made, failed ones included."""
        return self._opens

    def __contains__(self, path) -> bool:
        return self._key(path) in self._docs

    def __len__(self) -> int:
        return len(self._docs)

    def ensure(self, path) -> bool:
        """Open path as a PDF unless already cached. False on any failure."""
        key = self._key(path)
        if key in self._docs:
            return True

        self._opens += 1
        infile = None
        try:
            infile = open(path, "rb")
            reader = PyPDF2.PdfReader(infile)
            # Force the page tree to load so broken files fail here
            len(reader.pages)
        except Exception as e:
            logger.debug("Could not open %s: %s", path, e)
            if infile is not None:
                infile.close()
            return False

        self._docs[key] = (infile, reader)
        return True

    def get(self, path) -> PyPDF2.PdfReader:
        return self._docs[self._key(path)][1]

    def page_count(self, path) -> int:
        return len(self.get(path).pages)

    def close(self):
        for infile, _ in self._docs.values():
            infile.close()
        self._docs.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
