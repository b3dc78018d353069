"""
Error taxonomy for dtlearn.

InvalidInputError covers bad data handed to the learner (values outside a
domain, missing attributes). ConfigurationError is the subset caused by
malformed attribute descriptors or unknown options. PreconditionViolation
signals an internal contract breach and should be unreachable in normal use.
"""


class LearningError(Exception):
    """Base class for all dtlearn errors."""


class InvalidInputError(LearningError, ValueError):
    """Examples or attributes do not fit the declared variables."""


class ConfigurationError(InvalidInputError):
    """Malformed attribute descriptor (empty domain, duplicate name) or unknown option."""


class PreconditionViolation(LearningError, AssertionError):
    """A utility was called in a state the learner's branch ordering rules out."""
