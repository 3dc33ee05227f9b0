# energy_influx/main.py

from datetime import datetime, timezone
import logging
import sys
import time

from .cli import build_parser
from .config import AppConfig, Config
from .logging import ConsoleLog

from .services.api_errors import ApiError
from .services.envoy_client import EnvoyClient
from .services.enphase_poller import EnphasePoller
from .services.influx_sink import ConsoleSink, InfluxSink
from .services.octopus_client import Grouping, MeterType, OctopusClient, product_code_from_tariff
from .services.octopus_import import import_account_readings, iter_meters
from .services.output_formatter import (
    emit_envoy_stats,
    emit_lines,
    emit_section,
    format_readings,
    format_unit_rates,
    to_jsonable,
)

READINGS_PAGE_SIZE = 10


def _build_sink(use_console: bool, influx_cfg, log):
    if use_console:
        return ConsoleSink()
    return InfluxSink(influx_cfg, log)


def run_enphase(app_cfg: AppConfig, args, log) -> None:
    enphase_cfg = app_cfg.require_enphase()
    envoy = EnvoyClient(enphase_cfg, log)
    sink = _build_sink(args.console, app_cfg.influxdb_enphase, log)
    log.info(
        "Polling Envoy at %s every %ss",
        enphase_cfg.base_url,
        enphase_cfg.poll_period_seconds,
    )
    try:
        EnphasePoller(envoy, sink, enphase_cfg.poll_period_seconds, log).run(args.iterations)
    finally:
        sink.close()


def run_enphase_info(app_cfg: AppConfig, args, log, sleep=time.sleep) -> None:
    envoy = EnvoyClient(app_cfg.require_enphase(), log)

    emit_section("Home", envoy.home(), as_json=args.json)
    emit_section("Inventory", envoy.inventory(include_deleted=True), as_json=args.json)
    emit_section("Production", envoy.production(), as_json=args.json)
    emit_section("IVP meter readings", envoy.meter_readings(), as_json=args.json)
    emit_section("IVP meter reports", envoy.meter_reports(), as_json=args.json)
    emit_section("Inverters", envoy.inverters(), as_json=args.json)

    iterations = 0
    while args.iterations is None or iterations < args.iterations:
        production = envoy.production()
        inverters = envoy.inverters()
        emit_envoy_stats(production, inverters, datetime.now(timezone.utc), as_json=args.json)
        iterations += 1
        if args.iterations is None or iterations < args.iterations:
            sleep(args.interval)


def run_octopus(app_cfg: AppConfig, args, log) -> None:
    octopus_cfg = app_cfg.require_octopus()
    influx_cfg = app_cfg.influxdb_octopus
    client = OctopusClient(octopus_cfg, log)

    token = client.authenticate(octopus_cfg.email_address, octopus_cfg.password)
    account = client.get_account(token, octopus_cfg.account_id)

    sink = _build_sink(args.console, influx_cfg, log)
    try:
        written = import_account_readings(
            client,
            token,
            account,
            sink,
            influx_cfg.measurement or "octopower",
            octopus_cfg.num_readings,
            log,
        )
    finally:
        sink.close()
    log.info("Imported %d reading(s) for account %s", written, account.number)


def run_octopus_readings(app_cfg: AppConfig, args, log) -> None:
    octopus_cfg = app_cfg.require_octopus()
    client = OctopusClient(octopus_cfg, log)

    token = client.authenticate(octopus_cfg.email_address, octopus_cfg.password)
    account = client.get_account(token, octopus_cfg.account_id)

    lines: list[str] = []
    properties = []
    for prop in account.properties:
        lines.append(f"Property {prop.address_line_1}")
        tariff_code = None
        for meter_point in prop.electricity_meter_points:
            if meter_point.agreements:
                latest = meter_point.agreements[-1]
                tariff_code = latest.tariff_code
                lines.append(f"Electricity MPAN {meter_point.mpan} latest agreement {latest.tariff_code}")

        meters = []
        for meter_type, mpxn, serial in iter_meters(prop):
            lines.append(f"{meter_type.value.capitalize()} {mpxn} meter serial {serial}")
            entry = {"type": meter_type, "mpxn": mpxn, "serial": serial}
            try:
                readings = client.get_consumption(
                    token, meter_type, mpxn, serial, 0, READINGS_PAGE_SIZE, Grouping.DAY
                )
            except ApiError as exc:
                lines.append(f"Error getting consumption page 1 for meter: {exc}")
                entry["error"] = str(exc)
            else:
                lines.extend(format_readings(meter_type.value, readings))
                entry["readings"] = readings
            meters.append(entry)

        product_code = product_code_from_tariff(tariff_code) if tariff_code else None
        lines.append(f"Tariff code = {tariff_code}")
        lines.append(f"Extracted product code : {product_code}")

        unit_rates = None
        if product_code and tariff_code:
            try:
                unit_rates = client.get_standard_unit_rates(
                    token, MeterType.ELECTRICITY, product_code, tariff_code, 0, READINGS_PAGE_SIZE
                )
            except ApiError as exc:
                lines.append(f"Error getting unit rates page 1: {exc}")
            else:
                lines.extend(format_unit_rates(MeterType.ELECTRICITY.value, unit_rates))

        properties.append(
            {
                "address_line_1": prop.address_line_1,
                "tariff_code": tariff_code,
                "product_code": product_code,
                "meters": meters,
                "unit_rates": unit_rates,
            }
        )

    emit_lines(
        lines,
        payload={"account": account.number, "properties": to_jsonable(properties)},
        as_json=args.json,
    )


COMMANDS = {
    "enphase": run_enphase,
    "enphase-info": run_enphase_info,
    "octopus": run_octopus,
    "octopus-readings": run_octopus_readings,
}


def error_chain(exc: BaseException) -> list[str]:
    lines = [f"Error: {exc}"]
    seen = {id(exc)}
    cause = exc.__cause__ or (None if exc.__suppress_context__ else exc.__context__)
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        lines.append(f"Caused by: {cause}")
        cause = cause.__cause__ or (None if cause.__suppress_context__ else cause.__context__)
    return lines


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_cfg = Config.load(args.config)
        console_logger = ConsoleLog(
            level="DEBUG" if args.debug else app_cfg.logging.console_level,
            quiet=args.quiet or app_cfg.logging.console_quiet,
            debug_modules=app_cfg.logging.debug_modules,
        )
        log = console_logger.setup()

        command = COMMANDS.get(args.command)
        if command is None:
            raise ValueError(f"Unsupported command: {args.command}")
        command(app_cfg, args, log)
    except KeyboardInterrupt:
        logging.getLogger("energy_influx").info("Interrupted")
        return 130
    except Exception as exc:
        for line in error_chain(exc):
            print(line, file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
