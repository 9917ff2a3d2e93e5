"""Django application configuration for channels-xmlrpc."""

from __future__ import annotations

import logging

from django.apps import AppConfig

logger = logging.getLogger("channels_xmlrpc")


class ChannelsXmlRpcConfig(AppConfig):
    """Django app configuration for channels-xmlrpc.

    Loads the configuration and builds the shared codec once, at startup.

    Examples
    --------
    Add to INSTALLED_APPS in settings.py::

        INSTALLED_APPS = [
            ...
            'channels_xmlrpc',
            ...
        ]
    """

    name = "channels_xmlrpc"
    verbose_name = "Django Channels XML-RPC"

    def ready(self) -> None:
        """Load configuration and initialize the shared codec.

        Notes
        -----
        This method should not perform any database operations or import
        models, as it runs before Django is fully initialized.
        """
        from channels_xmlrpc.codec import init_codec
        from channels_xmlrpc.config import get_config

        config = get_config()
        codec = init_codec(config)

        logger.info(
            "channels-xmlrpc initialized: NAMING_CONVENTION=%s, "
            "STRICT_RESOLUTION=%s, MAX_BODY_SIZE=%d, ALLOW_NONE=%s",
            config.naming_convention.value,
            config.strict_resolution,
            config.limits.max_body_size,
            codec.allow_none,
        )

        if config.log_rpc_params:
            logger.warning(
                "LOG_RPC_PARAMS is enabled - XML-RPC arguments will be logged. "
                "This may expose sensitive information (PII, credentials). "
                "Only enable in development environments."
            )
