"""
=================================================================================================================
                                        Protocolo de Comando do Braço Robótico
=================================================================================================================
Define atuadores, ações, estados de conexão e a codificação da palavra de comando
enviada ao braço via USB.

Protocolo: palavra de 32 bits (ordem de bytes nativa do host)
- Cada atuador ocupa um campo de 2 bits no offset definido por Actuator
- Bits não usados são sempre zero
- A palavra inteira é retransmitida a cada alteração
"""

from enum import IntEnum
from typing import Mapping, Any

import numpy as np


COMMAND_MASK = 0xFFFFFFFF
FIELD_MASK = 0x03


class ConnectionStatus(IntEnum):
    """Estado da conexão com o braço"""

    DISCONNECTED = 0
    CONNECTING = 1
    CONNECTED = 2
    IO_ERROR = 3
    DISCONNECTING = 4
    DEVICE_NOT_FOUND = -1
    CONNECTION_FAILED = -2
    INVALID_COMMAND = -3

    def describe(self) -> str:
        """Texto legível do estado"""
        return _STATUS_STRINGS[self]


_STATUS_STRINGS = {
    ConnectionStatus.DISCONNECTED: "disconnected",
    ConnectionStatus.CONNECTING: "connecting",
    ConnectionStatus.CONNECTED: "connected",
    ConnectionStatus.IO_ERROR: "input/output error",
    ConnectionStatus.DISCONNECTING: "disconnecting",
    ConnectionStatus.DEVICE_NOT_FOUND: "device not found",
    ConnectionStatus.CONNECTION_FAILED: "connection failed",
    ConnectionStatus.INVALID_COMMAND: "invalid command",
}


class Actuator(IntEnum):
    """Atuadores do braço (valor = offset do campo de 2 bits)"""

    GRIPPER = 0
    WRIST = 2
    ELBOW = 4
    SHOULDER = 6
    BASE = 8
    LIGHT = 16


class Action(IntEnum):
    """Ações possíveis (vários nomes compartilham o mesmo valor)"""

    STOP = 0
    OFF = 0
    ON = 1
    CLOSE = 1
    UP = 1
    CW = 1
    OPEN = 2
    DOWN = 2
    CCW = 2


# Valores aceitos por cada atuador
VALID_ACTIONS = {
    Actuator.GRIPPER: frozenset({Action.STOP, Action.CLOSE, Action.OPEN}),
    Actuator.WRIST: frozenset({Action.STOP, Action.UP, Action.DOWN}),
    Actuator.ELBOW: frozenset({Action.STOP, Action.UP, Action.DOWN}),
    Actuator.SHOULDER: frozenset({Action.STOP, Action.UP, Action.DOWN}),
    Actuator.BASE: frozenset({Action.STOP, Action.CW, Action.CCW}),
    Actuator.LIGHT: frozenset({Action.ON, Action.OFF}),
}


class CommandEncoder:
    """Construtor da palavra de comando"""

    @staticmethod
    def is_command_valid(actuator: Any, action: Any) -> bool:
        """
        Verifica se o par (atuador, ação) é aceito pelo braço

        Aceita qualquer valor: entradas fora das enumerações retornam False.
        """
        if isinstance(actuator, bool) or isinstance(action, bool):
            return False
        try:
            actuator = Actuator(actuator)
            action = Action(action)
        except (ValueError, TypeError):
            return False
        return action in VALID_ACTIONS[actuator]

    @staticmethod
    def encode(word: int, actuator: Actuator, action: Action) -> int:
        """
        Aplica uma ação ao campo de um atuador

        Args:
            word: Palavra de comando atual
            actuator: Atuador a alterar
            action: Nova ação do atuador

        Returns:
            Nova palavra de comando (demais campos preservados)
        """
        if not CommandEncoder.is_command_valid(actuator, action):
            raise ValueError(f"Comando inválido: {actuator!r} -> {action!r}")
        if not 0 <= word <= COMMAND_MASK:
            raise ValueError(f"Palavra de comando fora de 32 bits: {word:#x}")

        offset = int(actuator)
        word &= ~(FIELD_MASK << offset) & COMMAND_MASK
        word |= int(action) << offset
        return word

    @staticmethod
    def encode_batch(word: int, commands: Mapping[Actuator, Action]) -> int:
        """
        Aplica várias ações de uma vez (tudo ou nada)

        Raises:
            ValueError: se qualquer par for inválido; nenhuma alteração é aplicada
        """
        invalid = [(a, b) for a, b in commands.items()
                   if not CommandEncoder.is_command_valid(a, b)]
        if invalid:
            raise ValueError(f"Comandos inválidos no lote: {invalid}")

        for actuator, action in commands.items():
            word = CommandEncoder.encode(word, actuator, action)
        return word

    @staticmethod
    def pack(word: int) -> bytes:
        """Serializa a palavra em 4 bytes (ordem nativa do host)"""
        if not 0 <= word <= COMMAND_MASK:
            raise ValueError(f"Palavra de comando fora de 32 bits: {word:#x}")
        return np.array([word], dtype=np.uint32).tobytes()


class CommandDecoder:
    """Interpretação da palavra de comando"""

    @staticmethod
    def decode(word: int, actuator: Actuator) -> Action:
        """Extrai a ação atual de um atuador"""
        offset = int(Actuator(actuator))
        return Action((word >> offset) & FIELD_MASK)

    @staticmethod
    def unpack(payload: bytes) -> int:
        """Reconstrói a palavra a partir dos 4 bytes transmitidos"""
        if len(payload) != np.dtype(np.uint32).itemsize:
            raise ValueError(f"Payload deve ter 4 bytes, recebeu {len(payload)}")
        return int(np.frombuffer(payload, dtype=np.uint32)[0])
