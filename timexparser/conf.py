from datetime import date, datetime
from functools import wraps

from timexparser.errors import SettingValidationError
from timexparser.settings import date_orders, preference_policies
from timexparser.settings import settings as default_settings


class Settings:
    """Control and configure default recognition behavior of timexparser.

    Currently supported settings:
    * `PREFER_DATES_FROM`
    * `PREFER_WEEKDAYS_FROM`
    * `RELATIVE_BASE`
    * `TIMEZONE`
    * `DATE_ORDER`
    * `DEFAULT_LANGUAGE`
    * `MAX_TEXT_LENGTH`
    """

    _default = True
    _mod_settings = dict()

    def __init__(self, settings=None):
        if settings:
            self._updateall(settings.items())
        else:
            self._updateall(default_settings.items())

    @classmethod
    def get_key(cls, settings=None):
        if not settings:
            return "default"
        return tuple(sorted((k, repr(v)) for k, v in settings.items()))

    def _updateall(self, iterable):
        for key, value in iterable:
            setattr(self, key, value)

    def replace(self, mod_settings=None, **kwds):
        for k, v in kwds.items():
            if v is None:
                raise TypeError('Invalid {{"{}": {}}}'.format(k, v))

        overrides = dict(self._mod_settings, **(mod_settings or kwds))
        for x in default_settings.keys():
            kwds.setdefault(x, getattr(self, x))

        kwds["_default"] = False
        kwds["_mod_settings"] = overrides

        return self.__class__(settings=kwds)

    @property
    def key(self):
        """Cache key of these settings, or None when their overrides are unknown."""
        if self._mod_settings:
            return self.get_key(self._mod_settings)
        if all(getattr(self, k) == v for k, v in default_settings.items()):
            return "default"
        return None

    def __repr__(self):
        values = ", ".join(
            "{}={!r}".format(key, getattr(self, key)) for key in default_settings
        )
        return "Settings({})".format(values)


settings = Settings()


def apply_settings(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        mod_settings = kwargs.get("settings")

        kwargs["settings"] = mod_settings or settings

        if isinstance(kwargs["settings"], dict):
            check_settings(kwargs["settings"])
            kwargs["settings"] = settings.replace(
                mod_settings=mod_settings, **kwargs["settings"]
            )

        if not isinstance(kwargs["settings"], Settings):
            raise TypeError(
                "settings can only be either dict or instance of Settings class"
            )

        return f(*args, **kwargs)

    return wrapper


def _check_policy(setting_name, setting_value):
    if setting_value not in preference_policies:
        raise SettingValidationError(
            '"{}" is not a valid value for "{}", it should be one of: {}'.format(
                setting_value, setting_name, ", ".join(preference_policies)
            )
        )


def _check_date_order(setting_name, setting_value):
    if setting_value.upper() not in date_orders:
        raise SettingValidationError(
            '"{}" is not a valid value for "{}", it should be one of: {}'.format(
                setting_value, setting_name, ", ".join(date_orders)
            )
        )


def _check_positive(setting_name, setting_value):
    if setting_value <= 0:
        raise SettingValidationError(
            '"{}" must be a positive integer, got {}'.format(
                setting_name, setting_value
            )
        )


def check_settings(settings):
    """
    Check if provided settings are valid, if not it raises `SettingValidationError`.
    Only checks for the modified settings.
    """
    settings_values = {
        "PREFER_DATES_FROM": {
            "type": str,
            "extra_check": _check_policy,
        },
        "PREFER_WEEKDAYS_FROM": {
            "type": str,
            "extra_check": _check_policy,
        },
        "RELATIVE_BASE": {
            "type": (datetime, date),
        },
        "TIMEZONE": {
            "type": str,
        },
        "DATE_ORDER": {
            "type": str,
            "extra_check": _check_date_order,
        },
        "DEFAULT_LANGUAGE": {
            "type": str,
        },
        "MAX_TEXT_LENGTH": {
            "type": int,
            "extra_check": _check_positive,
        },
    }

    for setting_name, setting_value in settings.items():
        setting_props = settings_values.get(setting_name)
        if not setting_props:
            raise SettingValidationError(
                '"{}" is not a valid setting'.format(setting_name)
            )

        if setting_name == "RELATIVE_BASE" and setting_value is False:
            continue

        if isinstance(setting_value, bool) or not isinstance(
            setting_value, setting_props["type"]
        ):
            raise SettingValidationError(
                '"{}" must be {}, not "{}".'.format(
                    setting_name,
                    setting_props["type"],
                    type(setting_value).__name__,
                )
            )

        extra_check = setting_props.get("extra_check")
        if extra_check:
            extra_check(setting_name, setting_value)
