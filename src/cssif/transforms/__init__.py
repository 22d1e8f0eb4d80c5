"""Build-time transforms from if() syntax to native CSS."""

from cssif.transforms.build import minify, transform
from cssif.transforms.native import declaration_block, substitute, transform_property

__all__ = ["declaration_block", "minify", "substitute", "transform", "transform_property"]
