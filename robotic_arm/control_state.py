"""
Estado de controle compartilhado entre as threads chamadoras e o ControlWorker.

Status da conexão e palavra de comando são protegidos pelo mesmo lock; a
Condition associada acorda o worker a cada alteração.
"""

import threading
from typing import Callable, Iterable, Tuple

from .protocol import ConnectionStatus


class ControlState:
    """Célula (status, palavra de comando) com notificação"""

    def __init__(self):
        self.changed = threading.Condition(threading.Lock())
        self.status = ConnectionStatus.DISCONNECTED
        self.command_word = 0

    def snapshot(self) -> Tuple[ConnectionStatus, int]:
        with self.changed:
            return self.status, self.command_word

    def set_status(self, status: ConnectionStatus) -> None:
        with self.changed:
            self.status = status
            self.changed.notify_all()

    def transition(self, status: ConnectionStatus,
                   unless: Iterable[ConnectionStatus] = ()) -> ConnectionStatus:
        """
        Troca o status, exceto se o atual estiver em `unless`

        Returns:
            Status anterior (inalterado quando pertence a `unless`)
        """
        with self.changed:
            previous = self.status
            if previous not in unless:
                self.status = status
                self.changed.notify_all()
            return previous

    def update_word(self, update: Callable[[int], int]) -> ConnectionStatus:
        """Aplica `update` à palavra de comando apenas no estado CONNECTED"""
        with self.changed:
            if self.status == ConnectionStatus.CONNECTED:
                word = update(self.command_word)
                if word != self.command_word:
                    self.command_word = word
                    self.changed.notify_all()
            return self.status

    def reset_word(self) -> None:
        with self.changed:
            self.command_word = 0
            self.changed.notify_all()

    def record_result(self, ok: bool) -> ConnectionStatus:
        """Registra o resultado de um envio, sem sobrescrever um pedido de desconexão"""
        with self.changed:
            if self.status in (ConnectionStatus.CONNECTING, ConnectionStatus.CONNECTED):
                self.status = ConnectionStatus.CONNECTED if ok else ConnectionStatus.IO_ERROR
                self.changed.notify_all()
            return self.status

    def wait_for_change(self, last_status: ConnectionStatus, last_word: int) -> Tuple[ConnectionStatus, int]:
        """Bloqueia até status ou palavra diferirem do último valor observado"""
        with self.changed:
            self.changed.wait_for(
                lambda: self.status != last_status or self.command_word != last_word
            )
            return self.status, self.command_word
