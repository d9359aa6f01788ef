"""
SourceImage - Identity of a single master image in the source directory.
"""

import os
from dataclasses import dataclass
from typing import Tuple

SCALE_MARKER = '@'
SCALE_DIGITS = '12345'


def parse_scaled_name(filename: str) -> Tuple[str, int]:
    """
    Split a filename into its logical name and resolution scale.

    Only the character right after the last '@' is inspected:
    'icon@2x.png' -> ('icon', 2). A marker at the start of the name or
    followed by anything other than 1-5 is kept as part of the name,
    with scale 1: 'icon@9x.png' -> ('icon@9x', 1).

    Args:
        filename: Base filename, with extension

    Returns:
        Tuple of (basename, scale)
    """
    stem = os.path.splitext(filename)[0]
    index = stem.rfind(SCALE_MARKER)

    if index > 0:
        scale_char = stem[index + 1:index + 2]
        if scale_char and scale_char in SCALE_DIGITS:
            return stem[:index], int(scale_char)

    return stem, 1


@dataclass
class SourceImage:
    """
    A source raster and its content identity.

    Attributes:
        filepath: Path to the file on disk
        filename: Base filename including extension
        basename: Logical name with the scale suffix stripped
        scale: Resolution the master was authored at (1-5)
        hash: Hex digest of the file bytes
    """
    filepath: str
    filename: str
    basename: str
    scale: int
    hash: str

    @classmethod
    def from_path(cls, filepath: str, digest: str) -> 'SourceImage':
        """Create from a file path and its precomputed content digest."""
        filename = os.path.basename(filepath)
        basename, scale = parse_scaled_name(filename)
        return cls(
            filepath=filepath,
            filename=filename,
            basename=basename,
            scale=scale,
            hash=digest,
        )

    def to_dict(self) -> dict:
        """Identity fields persisted in the manifest."""
        return {
            'filename': self.filename,
            'basename': self.basename,
            'hash': self.hash,
            'scale': self.scale,
        }

    def format_status(self) -> str:
        """Format a one-line description, e.g. 'logo@3x.png -> logo @3x [1a2b3c4d]'."""
        return f"{self.filename} -> {self.basename} @{self.scale}x [{self.hash[:8]}]"
