#!/usr/bin/env python3
"""
Constellation Geometry - Command-Line Host

Evaluates constellation geometry headlessly: satellite positions, coverage
footprints and inter-satellite links for one instant or a sweep of instants.

Usage:
    python main.py                                  # Iridium, current UTC time
    python main.py --time 0                         # Evaluate at t = 0 minutes
    python main.py --preset iridium_crosslink       # Plane-adjacent crosslinks
    python main.py --duration 100.4 --timestep 10   # Sweep one orbit
    python main.py --help                           # Show all options
"""

import argparse
import logging
import sys
from typing import List, Optional


logger = logging.getLogger("constellation.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Constellation geometry engine (positions, footprints, crosslinks)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                    # Iridium at the current UTC time
  %(prog)s --time 0                           # Evaluate at t = 0 minutes
  %(prog)s --preset iridium_crosslink         # 30° RAAN spacing, adjacent planes
  %(prog)s --policy plane_adjacent            # Restrict links to adjacent planes
  %(prog)s -p 4 -s 8 --raan-spacing 45        # Custom constellation
  %(prog)s --time 0 --duration 60 --timestep 5  # One hour sweep
        """,
    )

    # -------------------------------------------------------------------------
    # Preset
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--preset",
        type=str,
        choices=["iridium", "iridium_crosslink"],
        default="iridium",
        help="Base configuration (default: iridium)",
    )

    # -------------------------------------------------------------------------
    # Constellation overrides
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--planes",
        "-p",
        type=int,
        default=None,
        help="Number of orbital planes (default: from preset)",
    )
    parser.add_argument(
        "--sats-per-plane",
        "-s",
        type=int,
        default=None,
        help="Satellites per plane (default: from preset)",
    )
    parser.add_argument(
        "--altitude",
        "-a",
        type=float,
        default=None,
        help="Orbital altitude in km (default: from preset)",
    )
    parser.add_argument(
        "--inclination",
        "-i",
        type=float,
        default=None,
        help="Orbital inclination in degrees (default: from preset)",
    )
    parser.add_argument(
        "--period",
        type=float,
        default=None,
        help="Orbital period in minutes (default: from preset)",
    )
    parser.add_argument(
        "--raan-spacing",
        type=float,
        default=None,
        help="RAAN step between planes in degrees (default: from preset)",
    )
    parser.add_argument(
        "--body-radius",
        type=float,
        default=None,
        help="Primary body radius in km (default: from preset)",
    )

    # -------------------------------------------------------------------------
    # Coverage and link parameters
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--coverage-radius",
        type=float,
        default=None,
        help="Coverage radius in km (default: from preset)",
    )
    parser.add_argument(
        "--link-distance",
        type=float,
        default=None,
        help="Maximum inter-satellite link distance in km (default: from preset)",
    )
    parser.add_argument(
        "--policy",
        type=str,
        choices=["distance", "plane_adjacent", "disabled"],
        default=None,
        help="Link policy (default: from preset)",
    )

    # -------------------------------------------------------------------------
    # Time control
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--time",
        type=float,
        default=None,
        help="Elapsed minutes to evaluate at (default: current UTC time of day)",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=0.0,
        help="Sweep duration in minutes (default: 0, single frame)",
    )
    parser.add_argument(
        "--timestep",
        type=float,
        default=1.0,
        help="Sweep timestep in minutes (default: 1)",
    )

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--show",
        type=int,
        default=3,
        help="Satellites to list per frame (default: 3)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def config_from_args(args: argparse.Namespace):
    """Build a validated ConstellationConfig from parsed arguments."""
    from constellation import LinkPolicy, get_preset

    overrides = {
        "num_planes": args.planes,
        "sats_per_plane": args.sats_per_plane,
        "altitude": args.altitude,
        "inclination_deg": args.inclination,
        "orbital_period": args.period,
        "raan_spacing_deg": args.raan_spacing,
        "body_radius": args.body_radius,
        "coverage_radius": args.coverage_radius,
        "max_link_distance": args.link_distance,
    }
    if args.policy is not None:
        overrides["link_policy"] = LinkPolicy(args.policy)

    return get_preset(
        args.preset,
        **{key: value for key, value in overrides.items() if value is not None},
    )


def print_frame(frame, show: int) -> None:
    """Print a report for one frame."""
    summary = frame.summary()
    print(f"\nTime: {frame.elapsed_minutes:.2f} minutes")

    for state, footprint in list(zip(frame.satellites, frame.footprints))[:show]:
        x, y, z = state.position
        print(
            f"  P{state.index.plane}S{state.index.sat}: "
            f"pos=({x:+.0f}, {y:+.0f}, {z:+.0f}) km, "
            f"sub-point lat={footprint.latitude_deg:+.1f}°, "
            f"lon={footprint.longitude_deg:+.1f}°"
        )

    if len(frame.satellites) > show:
        print(f"  ... and {len(frame.satellites) - show} more satellites")

    print(f"  Visible links: {summary['visible_links']}/{summary['candidate_pairs']}")
    if summary["visible_links"]:
        print(
            f"  Link distances: {summary['min_link_distance']:.0f} - "
            f"{summary['max_link_distance']:.0f} km"
        )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    from constellation import ConstellationEngine, utc_now_minutes

    # -------------------------------------------------------------------------
    # Create configuration; refuse to evaluate an invalid one
    # -------------------------------------------------------------------------
    try:
        config = config_from_args(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    if args.timestep <= 0:
        logger.error("Timestep must be positive")
        return 2

    engine = ConstellationEngine(config)

    # -------------------------------------------------------------------------
    # Print configuration summary
    # -------------------------------------------------------------------------
    info = engine.get_summary()
    print("=" * 60)
    print("Constellation Geometry Engine")
    print("=" * 60)
    print(f"\nPreset: {args.preset}")
    print(f"Total Satellites: {info['num_satellites']}")
    print(f"Orbital Planes: {info['num_planes']} x {info['sats_per_plane']}")
    print(f"Orbital Radius: {info['orbital_radius_km']:.0f} km")
    print(f"Orbital Period: {info['orbital_period_min']:.1f} min")
    print(f"Inclination: {info['inclination_deg']}°")
    print(f"RAAN Spacing: {info['raan_spacing_deg']:.1f}°")
    print(f"Coverage Disc Radius: {info['coverage_angular_radius']:.3f} body radii")
    print(f"Link Policy: {info['link_policy']} (max {info['max_link_distance_km']:.0f} km)")
    print(f"Pair Checks per Frame: {info['comparisons_per_frame']}")

    # -------------------------------------------------------------------------
    # Evaluate
    # -------------------------------------------------------------------------
    start = args.time if args.time is not None else utc_now_minutes()

    # Integer step count; the last frame lands on start + duration
    steps = max(0, int(round(args.duration / args.timestep)))
    for step in range(steps + 1):
        print_frame(engine.compute_frame(start + step * args.timestep), args.show)

    return 0


if __name__ == "__main__":
    sys.exit(main())
