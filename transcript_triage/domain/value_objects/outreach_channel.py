"""Outreach channel value object."""

from enum import Enum


class OutreachChannel(str, Enum):
    """Channel staff use to reach out to a patient."""

    CALL = "call"
    TEXT = "text"
    EMAIL = "email"

    @classmethod
    def normalize(cls, value: object) -> "OutreachChannel":
        """
        Map any model-provided channel to a known channel.

        Args:
            value: Raw channel value (any type)

        Returns:
            Known channel, TEXT for anything unrecognized
        """
        if not isinstance(value, str):
            return cls.TEXT
        return _ALIASES.get(value.strip().lower(), cls.TEXT)


_ALIASES = {
    "call": OutreachChannel.CALL,
    "phone": OutreachChannel.CALL,
    "email": OutreachChannel.EMAIL,
    "text": OutreachChannel.TEXT,
    "sms": OutreachChannel.TEXT,
}
