#!/usr/bin/env python3
#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The GSL Bridge Project Authors
#
"""
Display the bridge configuration and run a round-trip self-check
"""

import argparse
import itertools
import logging
import sys

from gslbridge.bridge import ArrayBridge, BridgeConfig, MAPPED_KINDS, kind_to_dtype
from gslbridge.exceptions import BridgeError
from gslbridge.utils.numpy import np_init

logger = logging.getLogger(__name__)

VECTOR_SIZES = [0, 1, 3, 100]
MATRIX_DIMS = [0, 1, 3]


def check_vector(bridge: ArrayBridge, kind, size: int) -> bool:
    array = np_init((size,), kind)
    vector = bridge.ndarray_to_vector(array)
    back = bridge.vector_to_ndarray(vector)
    ok = bridge.equivalent(vector, array) and bridge.equivalent(
        bridge.ndarray_to_vector(back), vector
    )
    if ok and bridge.config.enable_views:
        view = bridge.ndarray_to_vector_view(array)
        ok = bridge.equivalent(view, array)
    return ok


def check_matrix(bridge: ArrayBridge, kind, size1: int, size2: int) -> bool:
    array = np_init((size1, size2), kind)
    matrix = bridge.ndarray_to_matrix(array)
    back = bridge.matrix_to_ndarray(matrix)
    ok = bridge.equivalent(matrix, array) and bridge.equivalent(
        bridge.ndarray_to_matrix(back), matrix
    )
    if ok and bridge.config.enable_views:
        view = bridge.ndarray_to_matrix_view(array)
        ok = bridge.equivalent(view, array)
    return ok


def run_checks(bridge: ArrayBridge) -> int:
    failures = 0
    for kind in MAPPED_KINDS:
        dtype = kind_to_dtype(kind)
        cases = [("vector", (size,)) for size in VECTOR_SIZES] + [
            ("matrix", dims) for dims in itertools.product(MATRIX_DIMS, MATRIX_DIMS)
        ]
        for role, shape in cases:
            logger.debug("checking %s %s %s", role, dtype.name, shape)
            try:
                if role == "vector":
                    ok = check_vector(bridge, kind, *shape)
                else:
                    ok = check_matrix(bridge, kind, *shape)
            except BridgeError as e:
                logger.error("%s %s %s: %s", role, dtype.name, shape, e)
                ok = False
            failures += not ok
            print(f"{role:8} {dtype.name:12} {str(shape):8} {'ok' if ok else 'FAILED'}")
    return failures


def display_config(config: BridgeConfig) -> None:
    print(f"views:       {'enabled' if config.enable_views else 'disabled'}")
    print(f"native gsl:  {config.gsl_version or 'unknown'}")
    print("kinds:       " + ", ".join(
        f"{kind.value}<->{kind_to_dtype(kind).name}" for kind in MAPPED_KINDS
    ))


def main():
    parser = argparse.ArgumentParser(
        description="GSL bridge configuration and self-check",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--views",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="enable view conversions, defaults to GSLBRIDGE_ENABLE_VIEWS",
    )
    parser.add_argument(
        "--probe-gsl",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="query gsl-config for the native GSL version",
    )
    parser.add_argument(
        "--check",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="run round-trip conversions for all mapped kinds",
    )
    parser.add_argument(
        "--debug", action=argparse.BooleanOptionalAction, help="debug mode"
    )
    args = parser.parse_args()

    logging.basicConfig()
    logger.setLevel(logging.INFO)
    if args.debug:
        logging.getLogger("gslbridge").setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)

    config = BridgeConfig.from_env(probe_gsl=args.probe_gsl)
    if args.views is not None:
        config = BridgeConfig(enable_views=args.views, gsl_version=config.gsl_version)
    display_config(config)

    if args.check:
        failures = run_checks(ArrayBridge(config))
        if failures:
            logger.error("%d round-trip checks failed", failures)
            sys.exit(1)


if __name__ == "__main__":
    main()
