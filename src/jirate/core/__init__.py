"""
Core module - Pure domain logic with no external dependencies.

This module contains:
- domain/: Entities and value objects
- ports/: Abstract interfaces that adapters must implement
- exceptions: Centralized exception hierarchy
- constants: Jira field names and expected status codes
- result: Ok/Err result type used by the resolution pipeline
"""

from .domain import *
from .exceptions import *
from .ports import *
from .result import Err, Ok, Result, ResultError
