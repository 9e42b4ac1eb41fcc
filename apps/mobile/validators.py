"""
apps.mobile.validators
~~~~~~~~~~~~~~~~~~~~~~
Pure-Python validation engine for mobile-app records.

No Django view, serializer, or model imports are allowed here so that this
module can be used as a standalone utility and tested without Django setup.

Rules are declared in :data:`MOBILE_APP_RULES` as an ordered table.  Every
rule is evaluated on every call and violations are reported in table order,
so a client receives the complete list of problems in a single round-trip.

Public API:
    MobileAppDraft                – candidate record handed to the validator
    MobileAppValidationError      – raised when validation finds one or more errors
    MobileAppValidator.validate(record) – validates a candidate record
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Callable

from .qr_config import Platform, QrCodeConfig

#: Inclusive bounds on ``appSecret`` length.
APP_SECRET_MIN_LENGTH = 16
APP_SECRET_MAX_LENGTH = 2048

#: Prefix of the aggregated error message.
VALIDATION_ERROR_PREFIX = "Validation error: "


# ---------------------------------------------------------------------------
# Candidate record
# ---------------------------------------------------------------------------

@dataclass
class MobileAppDraft:
    """
    A candidate mobile-app record as submitted by a client.

    ``id`` is ``None`` for a new record; otherwise the save replaces the
    stored record with that id.
    """

    pkg_name: str
    app_secret: str | None = None
    qr_code_config: QrCodeConfig | None = None
    id: uuid.UUID | None = None


# ---------------------------------------------------------------------------
# Exception
# ---------------------------------------------------------------------------

class MobileAppValidationError(Exception):
    """
    Raised by :meth:`MobileAppValidator.validate` when a candidate record
    breaks one or more rules.

    Attributes:
        errors (list[dict]): Non-empty list of ``{"field", "message"}`` dicts
            in rule-declaration order.
        message (str): ``"Validation error: "`` followed by every message,
            comma-separated.

    Example::

        try:
            MobileAppValidator.validate(draft)
        except MobileAppValidationError as exc:
            print(exc.message)
            # Validation error: appPackage must not be blank, storeLink must not be blank
    """

    def __init__(self, errors: list[dict]) -> None:
        self.errors: list[dict] = errors
        self.message: str = VALIDATION_ERROR_PREFIX + ", ".join(
            err["message"] for err in errors
        )
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------

def _is_blank(value: object) -> bool:
    """``None``, empty and whitespace-only strings are blank."""
    return value is None or (isinstance(value, str) and not value.strip())


def _secret_length_ok(value: object) -> bool:
    if not isinstance(value, str):
        return False
    return APP_SECRET_MIN_LENGTH <= len(value) <= APP_SECRET_MAX_LENGTH


def _always(record: Any) -> bool:
    return True


def _enabled_for(platform: Platform) -> Callable[[Any], bool]:
    """Predicate: *record* carries an enabled QR config for *platform*."""

    def predicate(record: Any) -> bool:
        config = getattr(record, "qr_code_config", None)
        return (
            config is not None
            and config.platform == platform
            and bool(config.enabled)
        )

    return predicate


@dataclass(frozen=True)
class FieldRule:
    """
    One declarative validation rule.

    Attributes:
        field: Wire (camelCase) field label used in error reports.
        applies: Predicate on the record; the rule is skipped when it is false.
        value: Extracts the value to check from the record.
        check: Returns ``True`` when the value is acceptable.
        message: Human-readable violation text.
    """

    field: str
    applies: Callable[[Any], bool]
    value: Callable[[Any], object]
    check: Callable[[object], bool]
    message: str


def _qr_field(attr: str) -> Callable[[Any], object]:
    return lambda record: getattr(record.qr_code_config, attr)


def _not_blank_rule(platform: Platform, label: str, attr: str) -> FieldRule:
    return FieldRule(
        field=label,
        applies=_enabled_for(platform),
        value=_qr_field(attr),
        check=lambda value: not _is_blank(value),
        message=f"{label} must not be blank",
    )


MOBILE_APP_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        field="appSecret",
        applies=_always,
        value=lambda record: getattr(record, "app_secret", None),
        check=_secret_length_ok,
        message=(
            f"appSecret must be at least {APP_SECRET_MIN_LENGTH} "
            f"and max {APP_SECRET_MAX_LENGTH} characters"
        ),
    ),
    _not_blank_rule(Platform.ANDROID, "appPackage", "app_package"),
    _not_blank_rule(Platform.ANDROID, "sha256CertFingerprints", "sha256_cert_fingerprints"),
    _not_blank_rule(Platform.ANDROID, "storeLink", "store_link"),
    _not_blank_rule(Platform.IOS, "appId", "app_id"),
    _not_blank_rule(Platform.IOS, "storeLink", "store_link"),
)


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------

class MobileAppValidator:
    """
    Stateless validator for candidate mobile-app records.

    *record* may be any object exposing ``app_secret`` and ``qr_code_config``
    attributes (a :class:`MobileAppDraft`, for example).

    Usage::

        MobileAppValidator.validate(draft)
        # Raises MobileAppValidationError if any rule is violated.
        # Returns None on success.
    """

    @staticmethod
    def collect_errors(record: Any, rules: tuple[FieldRule, ...] = MOBILE_APP_RULES) -> list[dict]:
        """Return every violation of *rules* by *record*, in rule order."""
        errors: list[dict] = []
        for rule in rules:
            if not rule.applies(record):
                continue
            if not rule.check(rule.value(record)):
                errors.append({"field": rule.field, "message": rule.message})
        return errors

    @staticmethod
    def validate(record: Any) -> None:
        """
        Validate *record* against :data:`MOBILE_APP_RULES`.

        Raises:
            MobileAppValidationError: If one or more rules are violated.
                ``exc.errors`` contains the complete list.
        """
        errors = MobileAppValidator.collect_errors(record)
        if errors:
            raise MobileAppValidationError(errors)
