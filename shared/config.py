"""
PwGauge Configuration Management
=================================

Centralized configuration for the PwGauge toolkit using Python
dataclasses and TOML-based persistence.

The tool section is frozen: it is built once at startup and handed to
the engine and the pattern matcher by reference, so no analysis can
alter the settings another analysis sees.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"

# Public k-Anonymity range API (Have I Been Pwned, Pwned Passwords v3)
DEFAULT_BREACH_API_URL = "https://api.pwnedpasswords.com"


# ========================== Tool-Specific Config ===========================


@dataclass(frozen=True, slots=True)
class GaugeConfig:
    """Configuration for Gauge -- Password Strength & Breach Exposure.

    Controls the breach lookup client and the word lists handed to the
    pattern matcher.

    Reference:
        Ali, J. (2018). Validating Leaked Passwords with k-Anonymity.
        Cloudflare Blog.
    """

    # Breach lookup parameters
    breach_check_enabled: bool = True
    breach_api_url: str = DEFAULT_BREACH_API_URL
    breach_timeout: float = 10.0
    breach_max_retries: int = 1
    breach_add_padding: bool = True
    user_agent: str = "PwGauge/1.0 (Password Strength Toolkit)"

    # Pattern matcher word lists
    context_words: tuple[str, ...] = ()
    custom_words: tuple[str, ...] = ()

    output_format: str = "console"

    def with_context(self, words: Iterable[str]) -> GaugeConfig:
        """Return a copy with *words* appended to :attr:`context_words`."""
        extra = tuple(w for w in words if w)
        if not extra:
            return self
        return replace(self, context_words=self.context_words + extra)


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity, log destination and debug mode."""

    log_level: str = "WARNING"
    log_file: str | None = None
    log_json: bool = False
    debug: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class PwGaugeConfig:
    """Master configuration aggregating tool-specific and global settings.

    Usage:
        >>> config = PwGaugeConfig.load()                  # from default path
        >>> config = PwGaugeConfig.load("custom.toml")     # from custom path
        >>> print(config.gauge.breach_api_url)
        'https://api.pwnedpasswords.com'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    gauge: GaugeConfig = field(default_factory=GaugeConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> PwGaugeConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root.  Missing keys fall back to dataclass defaults.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`PwGaugeConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        gauge_raw = dict(raw.get("gauge", {}))
        # TOML arrays arrive as lists; the frozen section stores tuples
        for key in ("context_words", "custom_words"):
            if key in gauge_raw:
                gauge_raw[key] = tuple(str(w) for w in gauge_raw[key])

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            gauge=cls._build_section(GaugeConfig, gauge_raw),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are ignored so that newer config
        files do not break older code.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


# ========================= Module-level convenience ========================

def get_config(path: str | Path | None = None) -> PwGaugeConfig:
    """Module-level convenience wrapper around :meth:`PwGaugeConfig.load`.

    Caches the result so that repeated imports share one instance.
    """
    if not hasattr(get_config, "_cached") or path is not None:
        get_config._cached = PwGaugeConfig.load(path)  # type: ignore[attr-defined]
    return get_config._cached  # type: ignore[attr-defined]
