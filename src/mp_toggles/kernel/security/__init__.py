"""Kernel security – the principal a toggle decision is made for."""
from mp_toggles.kernel.security.principal import Principal

__all__ = ["Principal"]
