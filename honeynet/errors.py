"""Exceptions raised by the simulation engine."""


class HoneynetError(Exception):
    """Base class for every engine error."""


class TopologyError(HoneynetError):
    """A mutation would break the server/honeypot topology."""


class NoPendingRetirement(HoneynetError):
    """An operator override targeted a retirement that is not pending."""


class RetirementInProgress(HoneynetError):
    """The pending node is already being retired; overrides are closed."""
