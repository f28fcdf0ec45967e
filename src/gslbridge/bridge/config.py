#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
from collections.abc import Mapping
from dataclasses import dataclass
import logging
import os

from ..utils.tools import get_gsl_config, version_tuple

__all__ = [
    "BridgeConfig",
]

logger = logging.getLogger(__name__)

# Oldest GSL release the bindings are exercised against
MIN_GSL_VERSION = (1, 15)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(name: str, value: str) -> bool:
    canonical = value.strip().lower()
    if canonical in _TRUE_VALUES:
        return True
    if canonical in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean value for {name}: {value!r}")


@dataclass(frozen=True)
class BridgeConfig:
    """Configuration of an ArrayBridge.

    Attributes:
        enable_views: True if the zero-copy view conversions are available.
        gsl_version: Version of the native GSL found at configuration time,
            None when it was not probed or not found. Informational only.
    """

    enable_views: bool = True
    gsl_version: str | None = None

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, probe_gsl: bool = False
    ) -> "BridgeConfig":
        """Build a configuration from environment variables.

        Reads GSLBRIDGE_ENABLE_VIEWS, and when probe_gsl is set, queries
        gsl-config for the native GSL version.
        """
        if environ is None:
            environ = os.environ
        enable_views = True
        views_var = environ.get("GSLBRIDGE_ENABLE_VIEWS")
        if views_var:
            enable_views = _parse_bool("GSLBRIDGE_ENABLE_VIEWS", views_var)
        gsl_version = None
        if probe_gsl:
            try:
                gsl_version = get_gsl_config()["version"]
            except RuntimeError as e:
                logger.debug("native GSL not probed: %s", e)
            else:
                if version_tuple(gsl_version) < MIN_GSL_VERSION:
                    logger.warning(
                        "native GSL %s is older than %s",
                        gsl_version,
                        ".".join(map(str, MIN_GSL_VERSION)),
                    )
        return cls(enable_views=enable_views, gsl_version=gsl_version)
