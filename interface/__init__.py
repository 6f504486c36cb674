"""Módulo de interface do usuário"""
from .control_window import ControlUnitWindow

__all__ = ["ControlUnitWindow"]
