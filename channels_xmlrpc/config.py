"""Configuration management for channels-xmlrpc.

This module provides configuration classes that integrate with Django settings,
allowing runtime configuration of limits, naming, logging and codec options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from channels_xmlrpc.naming import NamingConvention

SETTINGS_KEY = "CHANNELS_XMLRPC"


def _settings_dict() -> dict[str, Any]:
    """Return the ``CHANNELS_XMLRPC`` settings, or ``{}`` before Django is set up."""
    if not settings.configured:
        return {}
    return getattr(settings, SETTINGS_KEY, {})


@dataclass
class XmlRpcLimits:
    """Configuration for XML-RPC request size limits.

    Attributes
    ----------
    max_body_size : int
        Maximum size in bytes of a request body (default: 10MB).
    max_method_name_length : int
        Maximum length of the ``methodName`` element (default: 256).

    Examples
    --------
    Allow larger uploads::

        limits = XmlRpcLimits(max_body_size=50 * 1024 * 1024)
    """

    max_body_size: int = 10 * 1024 * 1024  # 10MB
    max_method_name_length: int = 256

    @classmethod
    def from_settings(cls) -> XmlRpcLimits:
        """Load limits from Django settings.

        Examples
        --------
        In Django settings.py::

            CHANNELS_XMLRPC = {
                'MAX_BODY_SIZE': 20 * 1024 * 1024,  # 20MB
                'MAX_METHOD_NAME_LENGTH': 128,
            }
        """
        config = _settings_dict()
        return cls(
            max_body_size=config.get("MAX_BODY_SIZE", cls.max_body_size),
            max_method_name_length=config.get(
                "MAX_METHOD_NAME_LENGTH", cls.max_method_name_length
            ),
        )


@dataclass
class XmlRpcConfig:
    """Main configuration for channels-xmlrpc.

    Attributes
    ----------
    limits : XmlRpcLimits
        Size limits for requests.
    naming_convention : NamingConvention
        How dotted method names are mapped onto consumer methods.
    strict_resolution : bool
        Send a fault instead of the neutral ``0`` result when a method is
        missing or not remote-invokable.
    allow_none : bool
        Whether ``None`` may be marshalled as ``<nil/>``.
    use_builtin_types : bool
        Decode ``dateTime.iso8601`` and ``base64`` to ``datetime`` and
        ``bytes`` instead of the codec's wrapper types.
    encoding : str
        Encoding of response bodies.
    log_rpc_params : bool
        Whether to log call arguments (may contain PII).
    sanitize_errors : bool
        Log invocation errors without a traceback.
    """

    limits: XmlRpcLimits = field(default_factory=XmlRpcLimits)
    naming_convention: NamingConvention = NamingConvention.FLAT
    strict_resolution: bool = False
    allow_none: bool = False
    use_builtin_types: bool = False
    encoding: str = "utf-8"
    log_rpc_params: bool = False
    sanitize_errors: bool = True

    @classmethod
    def from_settings(cls) -> XmlRpcConfig:
        """Load complete configuration from Django settings.

        Raises
        ------
        ImproperlyConfigured
            If ``NAMING_CONVENTION`` is not ``"flat"`` or ``"segmented"``.

        Examples
        --------
        In Django settings.py::

            CHANNELS_XMLRPC = {
                'NAMING_CONVENTION': 'segmented',
                'STRICT_RESOLUTION': False,
                'ALLOW_NONE': True,
            }
        """
        config_dict = _settings_dict()

        convention = config_dict.get("NAMING_CONVENTION", NamingConvention.FLAT)
        try:
            naming_convention = NamingConvention(convention)
        except ValueError as e:
            msg = f"{SETTINGS_KEY}['NAMING_CONVENTION'] must be 'flat' or 'segmented'"
            raise ImproperlyConfigured(msg) from e

        return cls(
            limits=XmlRpcLimits.from_settings(),
            naming_convention=naming_convention,
            strict_resolution=config_dict.get("STRICT_RESOLUTION", False),
            allow_none=config_dict.get("ALLOW_NONE", False),
            use_builtin_types=config_dict.get("USE_BUILTIN_TYPES", False),
            encoding=config_dict.get("ENCODING", "utf-8"),
            log_rpc_params=config_dict.get("LOG_RPC_PARAMS", False),
            sanitize_errors=config_dict.get("SANITIZE_ERRORS", True),
        )


# Global configuration instance
_config: XmlRpcConfig | None = None


def get_config() -> XmlRpcConfig:
    """Get the global XML-RPC configuration instance.

    On first call the configuration is loaded from Django settings; later
    calls return the cached instance.

    Notes
    -----
    Changes to Django settings after the first call are not reflected until
    :func:`reset_config` is called.
    """
    global _config
    if _config is None:
        _config = XmlRpcConfig.from_settings()
    return _config


def reset_config() -> None:
    """Reset the global configuration cache.

    Primarily useful for testing, where settings change between tests.
    """
    global _config
    _config = None
