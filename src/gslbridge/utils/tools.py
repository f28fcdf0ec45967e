#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
import os
import shutil
import subprocess
from pathlib import Path


def get_gsl_config_exe(gsl_config: Path | str | None = None) -> Path:
    """
    Tentatively return the path of the gsl-config script of
    the native GSL installation.
    Raise on error.
    Defined in order as:
    - passed path if not None
    - env var GSLBRIDGE_GSL_CONFIG
    - gsl-config binary in PATH
    """
    if gsl_config is None:
        config_var = os.environ.get("GSLBRIDGE_GSL_CONFIG")
        if config_var:
            gsl_config = Path(config_var)
        else:
            gsl_config_exe = shutil.which("gsl-config")
            if gsl_config_exe:
                gsl_config = Path(gsl_config_exe)
    else:
        gsl_config = Path(gsl_config)
    if gsl_config is None:
        raise RuntimeError("could not find GSL installation")
    if not gsl_config.exists():
        raise RuntimeError(f"could not find gsl-config at: {gsl_config}")
    return gsl_config


def get_gsl_config(gsl_config: Path | str | None = None) -> dict[str, str]:
    """
    Return the version, prefix, cflags and libs reported by gsl-config.
    Raise on error.
    """
    exe = get_gsl_config_exe(gsl_config)
    config = {}
    for arg in ["version", "prefix", "cflags", "libs"]:
        try:
            p = subprocess.run(
                [str(exe), f"--{arg}"], capture_output=True, check=True, text=True
            )
        except (OSError, subprocess.CalledProcessError) as e:
            raise RuntimeError(f"executing {exe} --{arg} failed: {e}") from e
        config[arg] = p.stdout.strip()
    return config


def version_tuple(version: str) -> tuple[int, ...]:
    """Parse a dotted version string such as 2.7.1 into a tuple of ints"""
    parts = []
    for part in version.strip().split("."):
        digits = ""
        for char in part:
            if not char.isdigit():
                break
            digits += char
        if not digits:
            break
        parts.append(int(digits))
    if not parts:
        raise ValueError(f"invalid version string: {version!r}")
    return tuple(parts)
