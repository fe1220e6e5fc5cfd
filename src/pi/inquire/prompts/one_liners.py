"""Shortcuts that run a prompt with default settings."""

from __future__ import annotations

import datetime

from pi.inquire.parser import parse_number
from pi.inquire.prompts.confirm import Confirm
from pi.inquire.prompts.custom_type import CustomType
from pi.inquire.prompts.dateselect import DateSelect
from pi.inquire.prompts.password import Password
from pi.inquire.prompts.text import Text


def prompt_text(message: str) -> str:
    return Text(message).prompt()


def prompt_secret(message: str) -> str:
    """Ask for a hidden value without a confirmation step."""
    return Password(message, enable_confirmation=False).prompt()


def prompt_confirm(message: str) -> bool:
    return Confirm(message).prompt()


def prompt_date(message: str) -> datetime.date:
    return DateSelect(message).prompt()


def prompt_int(message: str) -> int:
    return CustomType(message, parse_number(int)).prompt()


def prompt_float(message: str) -> float:
    return CustomType(message, parse_number(float)).prompt()
