"""
CacheEntry - Manifest record for a previously generated image.
"""

from dataclasses import dataclass, field
from typing import List, Optional

IDENTITY_FIELDS = ('filename', 'basename', 'hash', 'scale')


@dataclass
class CacheEntry:
    """
    Last known state of one logical image.

    Attributes:
        filename: Source filename at last generation
        basename: Logical image name (unique within a manifest)
        hash: Source content digest at last generation
        scale: Source scale at last generation
        outputs: Output paths produced last time, relative to the resource root
        dirty: Set during load when identity data or outputs are missing;
            never persisted
    """
    basename: Optional[str]
    filename: Optional[str] = None
    hash: Optional[str] = None
    scale: Optional[int] = None
    outputs: List[str] = field(default_factory=list)
    dirty: bool = False

    @property
    def is_complete(self) -> bool:
        """True if every identity field is present."""
        return all(getattr(self, name) is not None for name in IDENTITY_FIELDS)

    def matches(self, image) -> bool:
        """True if this entry describes the given SourceImage's current content."""
        return self.hash == image.hash and self.scale == image.scale

    def to_dict(self) -> dict:
        """Identity fields only; outputs are persisted in the manifest's output map."""
        return {name: getattr(self, name) for name in IDENTITY_FIELDS}

    @classmethod
    def from_dict(cls, data: dict, outputs: Optional[List[str]] = None) -> 'CacheEntry':
        """Create from a persisted record; missing fields are left as None."""
        return cls(
            filename=data.get('filename'),
            basename=data.get('basename'),
            hash=data.get('hash'),
            scale=data.get('scale'),
            outputs=list(outputs or []),
        )

    @classmethod
    def from_image(cls, image, outputs: List[str]) -> 'CacheEntry':
        """Create the entry recorded after generating a SourceImage."""
        return cls(
            filename=image.filename,
            basename=image.basename,
            hash=image.hash,
            scale=image.scale,
            outputs=list(outputs),
        )
