# energy_influx/cli.py
import argparse

def build_parser():
    parser = argparse.ArgumentParser(
        prog="energy-influx",
        description="Import Octopus Energy and Enphase Envoy readings into InfluxDB"
    )

    parser.add_argument(
        "--config",
        default="energy_influx.conf",
        help="Path to configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress log output on stdout"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of human-readable text (info commands)"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    # Envoy poll loop
    cmd_enphase = sub.add_parser(
        "enphase",
        help="Poll the Envoy forever and write readings to InfluxDB",
    )
    cmd_enphase.add_argument(
        "--console",
        action="store_true",
        help="Print line protocol instead of writing to InfluxDB",
    )
    cmd_enphase.add_argument(
        "--iterations",
        type=int,
        default=None,
        help="Stop after this many polls (default: run forever)",
    )

    cmd_info = sub.add_parser(
        "enphase-info",
        help="Dump every Envoy endpoint, then print live stats",
    )
    cmd_info.add_argument(
        "--interval",
        type=float,
        default=2.0,
        help="Seconds between live stat updates",
    )
    cmd_info.add_argument(
        "--iterations",
        type=int,
        default=None,
        help="Stop after this many updates (default: run forever)",
    )

    # Octopus one-shot import
    cmd_octopus = sub.add_parser(
        "octopus",
        help="Import the latest consumption readings of every meter into InfluxDB",
    )
    cmd_octopus.add_argument(
        "--console",
        action="store_true",
        help="Print line protocol instead of writing to InfluxDB",
    )

    sub.add_parser(
        "octopus-readings",
        help="Show account meters, recent daily consumption and unit rates",
    )

    return parser
