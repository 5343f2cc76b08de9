"""
Command-line interface for astrosampler.

Usage:
    # Sample an orbit path from orbital elements (degrees, AU)
    python -m astrosampler orbit --a 0.922 --e 0.191 --i 3.33 --om 204.4 --w 126.4

    # Sample the Earth reference orbit with 150 segments
    python -m astrosampler orbit --earth --points 150

    # Simulate a reproducible transit light curve
    python -m astrosampler lightcurve --period 3.5 --depth 0.012 --duration-hours 2.5 --seed 42
"""

import argparse
import json
import logging
import sys

import numpy as np
from pydantic import ValidationError

from astrosampler.config import SamplingConfig
from astrosampler.constants import DEFAULT_TRANSIT_DURATION_HOURS
from astrosampler.exceptions import SamplingError
from astrosampler.light_curve import depth_from_percent, simulate_transit_light_curve
from astrosampler.orbit_path import sample_orbit_path
from astrosampler.orbital_elements import APOPHIS_ORBIT, EARTH_ORBIT, OrbitalElements

logger = logging.getLogger(__name__)

_ELEMENT_NAMES = ('a', 'e', 'i', 'om', 'w')


def _setup_orbit_parser(subparsers):
    """
    Set up the orbit subcommand parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        The subparsers object from the main parser

    Returns
    -------
    argparse.ArgumentParser
        The configured orbit parser
    """
    orbit_parser = subparsers.add_parser(
        'orbit',
        help='Sample an orbit path in the visualization frame',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Explicit elements
  python -m astrosampler orbit --a 1.458 --e 0.223 --i 10.83 --om 304.3 --w 178.9

  # Apophis (the default object) with 150 segments
  python -m astrosampler orbit --points 150
"""
    )
    orbit_parser.add_argument('--a', type=float, help='Semi-major axis (AU)')
    orbit_parser.add_argument('--e', type=float, help='Eccentricity')
    orbit_parser.add_argument('--i', type=float, help='Inclination (deg)')
    orbit_parser.add_argument('--om', type=float, help='Longitude of the ascending node (deg)')
    orbit_parser.add_argument('--w', type=float, help='Argument of periapsis (deg)')
    orbit_parser.add_argument('--earth', action='store_true',
                              help='Sample the Earth reference orbit')
    orbit_parser.add_argument('--points', type=int, default=None,
                              help='Number of segments (overrides the config file)')
    orbit_parser.set_defaults(func=run_orbit)
    return orbit_parser


def _setup_lightcurve_parser(subparsers):
    """
    Set up the lightcurve subcommand parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        The subparsers object from the main parser

    Returns
    -------
    argparse.ArgumentParser
        The configured lightcurve parser
    """
    lc_parser = subparsers.add_parser(
        'lightcurve',
        help='Simulate a transit light curve over two periods',
    )
    lc_parser.add_argument('--period', type=float, required=True, help='Orbital period (days)')
    depth_group = lc_parser.add_mutually_exclusive_group(required=True)
    depth_group.add_argument('--depth', type=float, help='Fractional transit depth')
    depth_group.add_argument('--depth-percent', type=float, help='Transit depth (percent)')
    lc_parser.add_argument('--duration-hours', type=float, default=DEFAULT_TRANSIT_DURATION_HOURS,
                           help=f'Transit duration (hours, default: {DEFAULT_TRANSIT_DURATION_HOURS})')
    lc_parser.add_argument('--seed', type=int, default=None,
                           help='Seed for the flux jitter (default: fresh entropy)')
    lc_parser.set_defaults(func=run_lightcurve)
    return lc_parser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='astrosampler',
        description='Sample orbit paths and synthetic transit light curves',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--config', type=str, default=None,
                        help='JSON file with sampling parameters')
    subparsers = parser.add_subparsers(dest='command', required=True)
    _setup_orbit_parser(subparsers)
    _setup_lightcurve_parser(subparsers)
    return parser


def run_orbit(args, config: SamplingConfig):
    """Sample the requested orbit and return its points as nested lists"""
    given = [getattr(args, name) for name in _ELEMENT_NAMES]

    if args.earth:
        elements = EARTH_ORBIT
    elif all(value is None for value in given):
        logger.info("No orbital elements given, using Apophis")
        elements = APOPHIS_ORBIT
    elif any(value is None for value in given):
        missing = [name for name, value in zip(_ELEMENT_NAMES, given) if value is None]
        raise SamplingError(f"Missing orbital elements: {', '.join(missing)}")
    else:
        elements = OrbitalElements(*given)

    point_count = args.points if args.points is not None else config.point_count
    path = sample_orbit_path(elements, point_count, scale=config.visualization_scale)
    return np.asarray(path).tolist()


def run_lightcurve(args, config: SamplingConfig):
    """Simulate the requested light curve and return it as chart records"""
    depth = args.depth if args.depth is not None else depth_from_percent(args.depth_percent)
    curve = simulate_transit_light_curve(
        args.period, depth, args.duration_hours,
        seed=args.seed,
        n_samples=config.light_curve_samples,
        jitter_amplitude=config.jitter_amplitude,
        limb_darkening=config.limb_darkening_coefficient,
    )
    return curve.to_records()


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        config = SamplingConfig.load(args.config) if args.config else SamplingConfig()
        result = args.func(args, config)
    except (SamplingError, ValidationError, OSError) as err:
        print(f"error: {err}", file=sys.stderr)
        return 2

    json.dump(result, sys.stdout)
    sys.stdout.write('\n')
    return 0


if __name__ == '__main__':
    sys.exit(main())
