"""
=================================================================================================================
                                            Thread de Controle do Braço
=================================================================================================================
Única thread que escreve no dispositivo enquanto a conexão existe:
- Zera os atuadores ao iniciar e sinaliza o fim da inicialização (uma única vez)
- Aguarda mudanças na palavra de comando ou no status
- Retransmite a palavra mais recente (valores intermediários podem ser agrupados)
- Sai do loop em IO_ERROR ou no pedido de desconexão
- Zera os atuadores antes de terminar
"""

import logging
import threading
from concurrent.futures import Future
from typing import Tuple

from config import ArmParameters

from .control_state import ControlState
from .protocol import CommandEncoder, ConnectionStatus


class ControlWorker(threading.Thread):
    """Consumidor único da palavra de comando compartilhada"""

    def __init__(self, transport, handle, state: ControlState, ready: Future):
        """
        Args:
            transport: Transporte USB (UsbTransport ou equivalente)
            handle: Handle do dispositivo já aberto e com interface reivindicada
            state: Estado compartilhado com o RoboticArmUsb
            ready: Future resolvido com o status ao fim da inicialização
        """
        super().__init__(name="RoboticArmControl", daemon=True)
        self._logger = logging.getLogger("robotic_arm.worker")
        self._transport = transport
        self._handle = handle
        self._state = state
        self._ready = ready

    def run(self):
        try:
            status, last_word = self._initialise()
        except Exception as e:
            self._logger.exception(f"Falha na inicialização da thread de controle: {e}")
            self._ready.set_exception(e)
            return
        self._ready.set_result(status)

        try:
            while status == ConnectionStatus.CONNECTED:
                status, word = self._state.wait_for_change(status, last_word)
                if status == ConnectionStatus.CONNECTED and word != last_word:
                    status = self._state.record_result(self._send(word))
                last_word = word
        except Exception as e:
            self._logger.exception(f"Erro inesperado na thread de controle: {e}")
            self._state.record_result(False)
        finally:
            # Handle só é tocado por esta thread até o join() em disconnect()
            self._stop_actuators()
        self._logger.debug("Thread de controle encerrada")

    def _initialise(self) -> Tuple[ConnectionStatus, int]:
        """Zera a palavra de comando e os atuadores"""
        self._state.reset_word()
        status = self._state.record_result(self._send(0))
        return status, 0

    def _stop_actuators(self) -> None:
        """Escrita final da palavra zero (melhor esforço)"""
        try:
            stopped = self._send(0)
        except Exception as e:
            self._logger.exception(f"Erro ao parar os atuadores: {e}")
            stopped = False
        if not stopped:
            self._logger.warning("Não foi possível parar os atuadores ao encerrar")

    def _send(self, word: int) -> bool:
        """Envia a palavra em um control transfer; True se todos os bytes foram aceitos"""
        payload = CommandEncoder.pack(word)
        sent = self._transport.control_transfer(self._handle, payload)
        if sent == ArmParameters.PAYLOAD_LENGTH:
            self._logger.debug(f"Comando enviado: {word:#010x}")
            return True

        if sent < 0:
            self._logger.error(f"Erro ao enviar comando ao braço: erro libusb ({sent})")
        else:
            self._logger.error(
                f"Erro ao enviar comando ao braço: {sent} de {ArmParameters.PAYLOAD_LENGTH} bytes enviados"
            )
        return False
