"""Mailer configuration resolved once at construction."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_FROM_EMAIL = "noreply@example.com"
DEFAULT_TEMPLATE_PATH = "data/emailTemplates"
DEFAULT_TEMPLATE_MAP: Mapping[str, str] = MappingProxyType({"order.placed": "orderplaced"})

# Option keys accepted by MailerConfig.from_options, mapped to field names.
_OPTION_ALIASES = {
    "fromEmail": "from_email",
    "from_email": "from_email",
    "transport": "transport",
    "emailTemplatePath": "email_template_path",
    "email_template_path": "email_template_path",
    "templateMap": "template_map",
    "template_map": "template_map",
    "templateExtension": "template_extension",
    "template_extension": "template_extension",
}


@dataclass(frozen=True)
class SmtpTransportConfig:
    """SMTP connection parameters.

    Attributes:
        hostname: SMTP server host.
        port: SMTP server port.
        username: Login user, no login when unset.
        password: Login password.
        use_tls: Connect over implicit TLS.
        start_tls: Upgrade with STARTTLS after connecting.
        timeout: Socket timeout in seconds.
    """

    hostname: str = "localhost"
    port: int = 25
    username: str | None = None
    password: str | None = None
    use_tls: bool = False
    start_tls: bool = False
    timeout: float = 10.0

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None) -> SmtpTransportConfig:
        """Build from nodemailer-style or snake_case transport options."""
        if not options:
            return cls()

        opts = dict(options)
        auth = opts.pop("auth", None) or {}
        values: dict[str, Any] = {}

        hostname = opts.pop("hostname", None) or opts.pop("host", None)
        opts.pop("host", None)
        if hostname:
            values["hostname"] = str(hostname)
        if "port" in opts:
            values["port"] = int(opts.pop("port"))

        username = opts.pop("username", None) or auth.get("user")
        password = opts.pop("password", None) or auth.get("pass")
        if username:
            values["username"] = str(username)
        if password:
            values["password"] = str(password)

        for key in ("secureConnection", "use_tls", "secure"):
            if key in opts:
                values["use_tls"] = bool(opts.pop(key))
        for key in ("start_tls", "requireTLS"):
            if key in opts:
                values["start_tls"] = bool(opts.pop(key))
        if "timeout" in opts:
            values["timeout"] = float(opts.pop("timeout"))
        if "tls" in opts:
            # Socket-level TLS tuning (ciphers etc.) has no aiosmtplib equivalent.
            logger.warning(f"Ignoring transport tls options: {sorted(opts.pop('tls') or {})}")

        if opts:
            raise ConfigurationError(f"Unknown transport options: {sorted(opts)}")
        return cls(**values)


@dataclass(frozen=True)
class MailerConfig:
    """Process-wide mailer configuration.

    Attributes:
        from_email: Sender address for every email.
        transport: SMTP connection parameters.
        email_template_path: Filesystem root holding one directory per template.
        template_map: Event name to template id. Read-only.
        template_extension: File extension of template files.
    """

    from_email: str = DEFAULT_FROM_EMAIL
    transport: SmtpTransportConfig = field(default_factory=SmtpTransportConfig)
    email_template_path: str = DEFAULT_TEMPLATE_PATH
    template_map: Mapping[str, str] = field(default_factory=lambda: DEFAULT_TEMPLATE_MAP)
    template_extension: str = "njk"

    def __post_init__(self) -> None:
        if not self.from_email:
            raise ConfigurationError("from_email must not be empty")
        if not isinstance(self.template_map, MappingProxyType):
            object.__setattr__(
                self, "template_map", MappingProxyType(dict(self.template_map))
            )

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> MailerConfig:
        """
        Merge caller options over the defaults, key by key.

        A key that is present replaces the default wholesale (a supplied
        ``templateMap`` is not merged with the default map).
        """
        config = cls()
        if not options:
            return config

        known = {f.name for f in fields(cls)}
        updates: dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key)
            if name is None or name not in known:
                raise ConfigurationError(f"Unknown mailer option: {key!r}")
            if name == "transport" and not isinstance(value, SmtpTransportConfig):
                value = SmtpTransportConfig.from_options(value)
            updates[name] = value

        return replace(config, **updates)
