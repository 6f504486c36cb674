"""Parâmetros de configuração do braço"""
from .arm_parameters import ArmParameters

__all__ = ["ArmParameters"]
