"""Checked values: bounded integers, validated views, staged mutation."""

from checked_values.arithmetic import CheckedArithmetic
from checked_values.bounds import (
    I8,
    I16,
    I32,
    I64,
    I128,
    ISIZE,
    U8,
    U16,
    U32,
    U64,
    U128,
    USIZE,
    Behavior,
    IntKind,
    Limits,
    Panicking,
    Saturating,
)
from checked_values.capabilities import Bounded, Convertible, HasBehavior
from checked_values.errors import (
    AlreadyConsumed,
    BehaviorPanic,
    CheckedError,
    ConfigurationInvalid,
    DivideByZero,
    GuardInUse,
    MachineOverflow,
    OutOfBounds,
    ParseFailed,
    TooLarge,
    TooSmall,
    UnwrapFailed,
    ValidationFailed,
)
from checked_values.factory import ClampFactory, VerificationError, clamped
from checked_values.guard import Guard, GuardState
from checked_values.hard import HardClamp
from checked_values.soft import SoftClamp
from checked_values.validator import (
    AcceptAll,
    LimitsValidator,
    PredicateValidator,
    Validator,
)
from checked_values.view import View

__all__ = [
    "AcceptAll",
    "AlreadyConsumed",
    "Behavior",
    "BehaviorPanic",
    "Bounded",
    "CheckedArithmetic",
    "CheckedError",
    "ClampFactory",
    "ConfigurationInvalid",
    "Convertible",
    "DivideByZero",
    "Guard",
    "GuardInUse",
    "GuardState",
    "HardClamp",
    "HasBehavior",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "ISIZE",
    "IntKind",
    "Limits",
    "LimitsValidator",
    "MachineOverflow",
    "OutOfBounds",
    "Panicking",
    "ParseFailed",
    "PredicateValidator",
    "Saturating",
    "SoftClamp",
    "TooLarge",
    "TooSmall",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "USIZE",
    "UnwrapFailed",
    "ValidationFailed",
    "Validator",
    "VerificationError",
    "View",
    "clamped",
]
