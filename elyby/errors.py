"""Exceptions raised by the Ely.by client

API calls never raise these; runtime failures are returned as
``Failure`` results. Only misconfiguration is raised.
"""


class ElybyError(Exception):
    """Base class for exceptions raised by this package"""


class ConfigurationError(ElybyError):
    """A component was constructed without a required setting

    Attributes:
        parameter: Name of the missing constructor argument
    """

    def __init__(self, parameter: str):
        super().__init__(f"Required parameter is missing: {parameter}")
        self.parameter = parameter
