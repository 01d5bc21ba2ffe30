"""Construction of ogrinfo argument lists."""

from __future__ import annotations

import logging

from ogrinfo_validator.constants import GEOCSV_OPEN_OPTIONS, VSIZIP_PREFIX
from ogrinfo_validator.formats import InputDescriptor, VectorFormat
from ogrinfo_validator.options import OptionSet

logger = logging.getLogger(__name__)


def source_argument(descriptor: InputDescriptor) -> str:
    """Return the datasource argument: the absolute path, or a /vsizip/ path for bundles."""
    resolved = str(descriptor.resolved_path)
    if descriptor.format == VectorFormat.SHAPEFILE_BUNDLE:
        return VSIZIP_PREFIX + resolved
    return resolved


def build_arguments(descriptor: InputDescriptor, options: OptionSet) -> list[str]:
    """Build the ogrinfo argument list for an input.

    The datasource comes first, then one flag per option in caller order.
    GeoCSV inputs called with any option also get open options that read
    the longitude/latitude columns as point geometry and drop them from
    the attribute list.

    Args:
        descriptor: The pre-validated input.
        options: Checked option set.

    Returns:
        Arguments for ogrinfo, without the executable name.
    """
    args = [source_argument(descriptor), *options.flags]
    if descriptor.format == VectorFormat.GEOCSV and len(args) > 1:
        args.extend(GEOCSV_OPEN_OPTIONS)
    logger.debug("ogrinfo arguments: %s", args)
    return args
