# energy_influx/config.py
from dataclasses import dataclass, field
from pathlib import Path
import configparser


OCTOPUS_API_BASE = "https://api.octopus.energy/v1/"
OCTOPUS_GRAPHQL_URL = "https://api.octopus.energy/v1/graphql/"


@dataclass
class EnphaseConfig:
    base_url: str
    token: str
    poll_period_seconds: int
    timeout: float | None = None


@dataclass
class OctopusConfig:
    email_address: str
    password: str
    account_id: str
    num_readings: int = 1000
    base_url: str = OCTOPUS_API_BASE
    graphql_url: str = OCTOPUS_GRAPHQL_URL
    timeout: float | None = None


@dataclass
class InfluxConfig:
    url: str = "http://localhost:8086"
    database: str = "enphase"
    username: str | None = None
    password: str | None = None
    measurement: str | None = None
    timeout_ms: int = 10_000


@dataclass
class LoggingConfig:
    console_level: str = "INFO"
    console_quiet: bool = False
    debug_modules: list[str] = field(default_factory=list)


@dataclass
class AppConfig:
    enphase: EnphaseConfig | None
    octopus: OctopusConfig | None
    influxdb_enphase: InfluxConfig
    influxdb_octopus: InfluxConfig
    logging: LoggingConfig

    def require_enphase(self) -> EnphaseConfig:
        if self.enphase is None:
            raise ValueError("[enphase] section missing from config")
        return self.enphase

    def require_octopus(self) -> OctopusConfig:
        if self.octopus is None:
            raise ValueError("[octopus] section missing from config")
        return self.octopus


class Config:
    def __init__(self, path: str):
        self.path = Path(path)
        self.parser = configparser.ConfigParser(inline_comment_prefixes=("#",))
        read = self.parser.read(self.path)
        if not read:
            raise FileNotFoundError(f"Config file not found: {self.path}")

    @classmethod
    def load(cls, path: str) -> AppConfig:
        cfg = cls(path)

        p = cfg.parser

        def _as_bool(value: str) -> bool:
            return value.strip().lower() == "true"

        def _required(section: str, key: str) -> str:
            raw = p[section].get(key, "").strip()
            if not raw:
                raise ValueError(f"[{section}] {key} is required")
            return raw

        def _number(section: str, key: str, kind):
            raw = p[section][key].strip()
            try:
                return kind(raw)
            except ValueError as exc:
                raise ValueError(f"[{section}] {key} must be a number, got '{raw}'") from exc

        # --- Enphase ---
        enphase_cfg = None
        if "enphase" in p:
            enphase_sec = p["enphase"]
            _required("enphase", "poll_period_seconds")
            poll_period = _number("enphase", "poll_period_seconds", int)
            if poll_period <= 0:
                raise ValueError("[enphase] poll_period_seconds must be positive")
            enphase_kwargs = {
                "base_url": _required("enphase", "base_url"),
                "token": _required("enphase", "token"),
                "poll_period_seconds": poll_period,
            }
            if enphase_sec.get("timeout", "").strip():
                enphase_kwargs["timeout"] = _number("enphase", "timeout", float)
            enphase_cfg = EnphaseConfig(**enphase_kwargs)

        # --- Octopus ---
        octopus_cfg = None
        if "octopus" in p:
            octopus_sec = p["octopus"]
            octopus_kwargs = {
                "email_address": _required("octopus", "email_address"),
                "password": _required("octopus", "password"),
                "account_id": _required("octopus", "account_id"),
            }
            if "num_readings" in octopus_sec:
                num_readings = _number("octopus", "num_readings", int)
                if num_readings <= 0:
                    raise ValueError("[octopus] num_readings must be positive")
                octopus_kwargs["num_readings"] = num_readings
            if "base_url" in octopus_sec:
                octopus_kwargs["base_url"] = octopus_sec["base_url"]
            if "graphql_url" in octopus_sec:
                octopus_kwargs["graphql_url"] = octopus_sec["graphql_url"]
            if octopus_sec.get("timeout", "").strip():
                octopus_kwargs["timeout"] = _number("octopus", "timeout", float)
            octopus_cfg = OctopusConfig(**octopus_kwargs)

        # --- InfluxDB ---
        influx_defaults = {}
        if "influxdb" in p:
            influx_sec = p["influxdb"]
            for key in ("url", "username", "password"):
                if key in influx_sec:
                    influx_defaults[key] = influx_sec[key]
            if "timeout_ms" in influx_sec:
                influx_defaults["timeout_ms"] = _number("influxdb", "timeout_ms", int)

        def _influx(program: str, database: str, measurement: str | None) -> InfluxConfig:
            kwargs = dict(influx_defaults)
            kwargs["database"] = database
            kwargs["measurement"] = measurement
            section = f"influxdb:{program}"
            if section in p:
                sec = p[section]
                for key in ("url", "database", "username", "password", "measurement"):
                    if key in sec:
                        kwargs[key] = sec[key]
                if "timeout_ms" in sec:
                    kwargs["timeout_ms"] = _number(section, "timeout_ms", int)
            return InfluxConfig(**kwargs)

        influx_enphase = _influx("enphase", "enphase", None)
        influx_octopus = _influx("octopus", "octopower", "octopower")

        logging_kwargs = {}
        if "logging" in p:
            logging_sec = p["logging"]
            if "console_level" in logging_sec:
                logging_kwargs["console_level"] = logging_sec["console_level"]
            if "console_quiet" in logging_sec:
                logging_kwargs["console_quiet"] = _as_bool(logging_sec["console_quiet"])
            if "debug_modules" in logging_sec:
                raw = logging_sec["debug_modules"]
                logging_kwargs["debug_modules"] = [x.strip() for x in raw.split(",") if x.strip()]
        logging_cfg = LoggingConfig(**logging_kwargs)

        return AppConfig(
            enphase=enphase_cfg,
            octopus=octopus_cfg,
            influxdb_enphase=influx_enphase,
            influxdb_octopus=influx_octopus,
            logging=logging_cfg,
        )
