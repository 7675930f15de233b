"""
Core enumerations for the dataflow mesh model.

This module defines the closed vocabularies used by meshes and their
activation history: the direction of a port and the outcome code of a
component activation.
"""

from enum import Enum, auto


class PortDirection(Enum):
    """
    Direction of a component port.

    - IN: Port receives signals through incoming pipes
    - OUT: Port emits signals through its outgoing pipes
    """

    IN = auto()
    """Input port, the destination end of a pipe."""

    OUT = auto()
    """Output port, the source end of a pipe."""


class ActivationCode(Enum):
    """
    Outcome of a single component activation within one cycle.

    Member values are the display names used in rendered output.
    """

    OK = "OK"
    """Component ran and finished without error."""

    NO_INPUT = "NoInput"
    """Component was not activated because no input signals were present."""

    NO_FUNCTION = "NoFunction"
    """Component has no activation function attached."""

    RETURNED_ERROR = "ReturnedError"
    """Activation function returned an error."""

    PANICKED = "Panicked"
    """Activation function crashed."""

    WAITING_FOR_INPUTS_CLEAR = "WaitingForInputsClear"
    """Component is waiting for more inputs and its current inputs were cleared."""

    WAITING_FOR_INPUTS_KEEP = "WaitingForInputsKeep"
    """Component is waiting for more inputs and kept its current inputs."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, text: str) -> "ActivationCode":
        """
        Parse a display name ("ReturnedError") or member name ("RETURNED_ERROR").

        Raises:
            ValueError: If the text names no known code
        """
        for code in cls:
            if text == code.value or text == code.name:
                return code
        raise ValueError(f"unknown activation code: {text!r}")
