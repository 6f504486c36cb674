"""
=================================================================================================================
                                        Controlador USB do Braço Robótico
=================================================================================================================
Interface de alto nível para o braço Velleman KSR10 / OWI-535 "Robotic Arm Edge":
- Descobre o dispositivo e gerencia a conexão (connect/disconnect)
- Recebe comandos de qualquer thread e os aplica à palavra de comando compartilhada
- Delega todo o I/O USB ao ControlWorker, que roda em thread própria

Todas as operações públicas retornam o ConnectionStatus resultante; falhas de
validação e de descoberta nunca são lançadas como exceção.
"""

import logging
import threading
from concurrent.futures import Future
from typing import Optional, Mapping

from config import ArmParameters

from .control_state import ControlState
from .control_worker import ControlWorker
from .protocol import Action, Actuator, CommandEncoder, ConnectionStatus
from .usb_transport import TransportError, UsbTransport


class ArmStateError(RuntimeError):
    """Violação de invariante interno (erro de programação, irrecuperável)"""


class RoboticArmUsb:
    """
    Controlador do braço robótico via USB.

    Responsabilidades:
    - Manter no máximo um handle de dispositivo por vez
    - Serializar connect/disconnect
    - Validar e codificar comandos antes de qualquer alteração de estado
    - Iniciar e encerrar a thread de controle
    """

    """
    =================================================================================================================
                                                Setup Inicial
    =================================================================================================================
    """

    def __init__(self, transport=None,
                 vendor_id: int = ArmParameters.VENDOR_ID,
                 product_id: int = ArmParameters.PRODUCT_ID):
        """
        Inicializa o controlador (não conecta)

        Args:
            transport: Transporte USB; padrão é UsbTransport() sobre libusb
            vendor_id: Vendor ID esperado do dispositivo
            product_id: Product ID esperado do dispositivo

        Raises:
            TransportInitError: se o subsistema USB não puder ser iniciado
        """
        self._logger = logging.getLogger("robotic_arm.controller")
        self._handle = None
        self._worker: Optional[ControlWorker] = None

        self._transport = transport if transport is not None else UsbTransport()
        self._vendor_id = vendor_id
        self._product_id = product_id

        # connect/disconnect e o handle
        self._connection_lock = threading.Lock()
        # status + palavra de comando (compartilhados com o worker)
        self._state = ControlState()

    def __del__(self):
        if getattr(self, "_handle", None) is not None:
            self.disconnect()

    def __enter__(self) -> "RoboticArmUsb":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    """
    =================================================================================================================
                                                API Pública
    =================================================================================================================
    """

    def connect(self) -> ConnectionStatus:
        """
        Conecta ao braço e inicia a thread de controle

        Bloqueia até a thread de controle terminar a inicialização (primeiro
        comando de parada enviado).

        Returns:
            CONNECTED, IO_ERROR, DEVICE_NOT_FOUND ou CONNECTION_FAILED; se já
            conectado, o status atual
        """
        with self._connection_lock:
            if self._handle is not None:
                return self.get_status()

            session = (ConnectionStatus.CONNECTING, ConnectionStatus.CONNECTED,
                       ConnectionStatus.IO_ERROR, ConnectionStatus.DISCONNECTING)
            previous = self._state.transition(ConnectionStatus.CONNECTING, unless=session)
            if previous in session:
                self._fail_invariant(f"handle ausente com status {previous.name}")

            device = self._transport.find_device(self._vendor_id, self._product_id)
            if device is None:
                self._logger.warning(
                    f"Dispositivo USB do braço não encontrado "
                    f"({self._vendor_id:04x}:{self._product_id:04x})"
                )
                self._state.set_status(ConnectionStatus.DEVICE_NOT_FOUND)
                return ConnectionStatus.DEVICE_NOT_FOUND

            handle = self._open(device)
            if handle is None:
                self._state.set_status(ConnectionStatus.CONNECTION_FAILED)
                return ConnectionStatus.CONNECTION_FAILED

            self._handle = handle
            ready: Future = Future()
            self._worker = ControlWorker(self._transport, handle, self._state, ready)
            self._worker.start()

            try:
                status = ready.result()
            except Exception:
                self._worker.join()
                self._worker = None
                self._release_handle()
                self._state.set_status(ConnectionStatus.DISCONNECTED)
                raise

            if status == ConnectionStatus.CONNECTED:
                self._logger.info("Braço conectado")
            return status

    def disconnect(self) -> ConnectionStatus:
        """
        Encerra a thread de controle (atuadores parados) e fecha o dispositivo

        Bloqueia até a thread de controle terminar. Seguro a partir de qualquer
        estado, inclusive IO_ERROR.

        Returns:
            DISCONNECTED
        """
        with self._connection_lock:
            if self._handle is None:
                self._state.set_status(ConnectionStatus.DISCONNECTED)
                return ConnectionStatus.DISCONNECTED

            previous = self._state.transition(ConnectionStatus.DISCONNECTING,
                                              unless=(ConnectionStatus.DISCONNECTED,))
            if previous == ConnectionStatus.DISCONNECTED:
                self._fail_invariant("handle presente com status DISCONNECTED")

            if self._worker is None:
                self._fail_invariant("thread de controle inexistente com handle presente")
            # Em IO_ERROR o worker já saiu do loop (ou está na escrita final)
            self._worker.join()
            self._worker = None

            self._release_handle()
            self._state.set_status(ConnectionStatus.DISCONNECTED)
            self._logger.info("Braço desconectado")
            return ConnectionStatus.DISCONNECTED

    def close(self) -> None:
        """Desconecta, se necessário"""
        self.disconnect()

    @staticmethod
    def is_command_valid(actuator: Actuator, action: Action) -> bool:
        """Verifica se o par (atuador, ação) é aceito pelo braço"""
        return CommandEncoder.is_command_valid(actuator, action)

    def send_command(self, actuator: Actuator, action: Action) -> ConnectionStatus:
        """
        Envia um comando para um atuador

        Comandos enviados fora do estado CONNECTED são descartados.

        Args:
            actuator: Atuador
            action: Ação desejada

        Returns:
            INVALID_COMMAND se o par for inválido; caso contrário o status atual
        """
        return self.send_commands({actuator: action})

    def send_commands(self, commands: Mapping[Actuator, Action]) -> ConnectionStatus:
        """
        Envia vários comandos como uma única alteração (tudo ou nada)

        Returns:
            INVALID_COMMAND se qualquer par for inválido; caso contrário o status atual
        """
        # Validação antes de adquirir o lock
        if not all(CommandEncoder.is_command_valid(a, b) for a, b in commands.items()):
            return ConnectionStatus.INVALID_COMMAND

        return self._state.update_word(lambda word: CommandEncoder.encode_batch(word, commands))

    def send_stop(self) -> ConnectionStatus:
        """Para todos os atuadores (e apaga a luz)"""
        return self._state.update_word(lambda word: 0)

    def get_status(self) -> ConnectionStatus:
        """Status atual (não bloqueia em I/O)"""
        return self._state.snapshot()[0]

    def get_command_word(self) -> int:
        """Palavra de comando atual"""
        return self._state.snapshot()[1]

    @staticmethod
    def get_status_string(status) -> str:
        """Texto legível de um status ("other error" para valores desconhecidos)"""
        try:
            return ConnectionStatus(status).describe()
        except ValueError:
            return "other error"

    """
    =================================================================================================================
                                            Métodos Internos (Privados)
    =================================================================================================================
    """

    def _open(self, device):
        """Abre o dispositivo e reivindica a interface; None em caso de falha"""
        try:
            handle = self._transport.open(device)
        except TransportError as e:
            self._logger.error(str(e))
            return None

        try:
            self._transport.claim_interface(handle, ArmParameters.INTERFACE)
        except TransportError as e:
            self._logger.error(str(e))
            self._transport.close(handle)
            return None
        return handle

    def _release_handle(self) -> None:
        """Libera interface e fecha o handle (worker já encerrado)"""
        try:
            self._transport.release_interface(self._handle, ArmParameters.INTERFACE)
        except TransportError as e:
            self._logger.warning(str(e))
        self._transport.close(self._handle)
        self._handle = None

    def _fail_invariant(self, detail: str) -> None:
        msg = f"Invariante violado: {detail}"
        self._logger.critical(msg)
        raise ArmStateError(msg)
