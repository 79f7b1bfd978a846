from datetime import date, datetime
from enum import Enum
from typing import TypeAlias

PrimitiveType: TypeAlias = str | int | float | bool

ParameterValue: TypeAlias = str | int | bool | date | datetime | Enum | None
