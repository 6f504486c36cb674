"""
=================================================================================================================
                                            Transporte USB do Braço
=================================================================================================================
Camada de transporte sobre pyusb (backend libusb 1.0).
Responsável apenas por enumerar, abrir, reivindicar e enviar control transfers;
não interpreta a palavra de comando (delegado ao ControlWorker).
"""

import logging
from typing import Optional, Any

import usb.core
import usb.util
import usb.backend.libusb1

from config import ArmParameters


class TransportError(RuntimeError):
    """Falha ao abrir, reivindicar ou liberar o dispositivo"""


class TransportInitError(TransportError):
    """Subsistema USB indisponível (libusb não encontrada)"""


class UsbTransport:
    """
    Acesso ao dispositivo USB via pyusb.

    O "handle" devolvido por open() é o próprio usb.core.Device; todas as
    operações de I/O recebem esse handle.
    """

    def __init__(self, backend: Optional[Any] = None):
        """
        Inicializa o backend libusb

        Raises:
            TransportInitError: se nenhum backend libusb estiver disponível
        """
        self._logger = logging.getLogger("robotic_arm.usb")
        self._backend = backend if backend is not None else usb.backend.libusb1.get_backend()
        if self._backend is None:
            msg = "Erro ao inicializar o driver do braço: backend libusb não encontrado"
            self._logger.error(msg)
            raise TransportInitError(msg)

    def find_device(self, vendor_id: int, product_id: int) -> Optional[usb.core.Device]:
        """
        Procura o primeiro dispositivo com o par vendor/product informado

        Returns:
            Dispositivo encontrado ou None
        """
        count = 0
        for device in usb.core.find(find_all=True, backend=self._backend):
            count += 1
            if device.idVendor == vendor_id and device.idProduct == product_id:
                self._logger.info(
                    f"Dispositivo encontrado: {vendor_id:04x}:{product_id:04x} "
                    f"(bus {device.bus}, endereço {device.address})"
                )
                return device
        self._logger.debug(f"{count} dispositivos USB verificados, nenhum {vendor_id:04x}:{product_id:04x}")
        return None

    def open(self, device: usb.core.Device) -> usb.core.Device:
        """Abre o dispositivo, desanexando o driver do kernel se necessário"""
        try:
            if device.is_kernel_driver_active(ArmParameters.INTERFACE):
                device.detach_kernel_driver(ArmParameters.INTERFACE)
                self._logger.debug("Driver do kernel desanexado")
        except NotImplementedError:
            # Windows/macOS: backend não expõe drivers de kernel
            pass
        except usb.core.USBError as e:
            raise TransportError(f"Erro ao abrir o dispositivo USB do braço: {e}") from e
        return device

    def claim_interface(self, handle: usb.core.Device, interface: int = ArmParameters.INTERFACE) -> None:
        try:
            usb.util.claim_interface(handle, interface)
        except usb.core.USBError as e:
            raise TransportError(f"Erro ao reivindicar a interface USB do braço: {e}") from e

    def release_interface(self, handle: usb.core.Device, interface: int = ArmParameters.INTERFACE) -> None:
        try:
            usb.util.release_interface(handle, interface)
        except usb.core.USBError as e:
            raise TransportError(f"Erro ao liberar a interface USB do braço: {e}") from e

    def close(self, handle: usb.core.Device) -> None:
        usb.util.dispose_resources(handle)

    def control_transfer(self, handle: usb.core.Device, payload: bytes) -> int:
        """
        Envia a palavra de comando em um control transfer

        Returns:
            Número de bytes aceitos ou código de erro negativo do backend
        """
        try:
            return handle.ctrl_transfer(
                ArmParameters.REQUEST_TYPE,
                ArmParameters.REQUEST,
                ArmParameters.VALUE,
                ArmParameters.INDEX,
                payload,
                timeout=ArmParameters.TIMEOUT_MS,
            )
        except usb.core.USBError as e:
            code = e.backend_error_code
            self._logger.debug(f"ctrl_transfer falhou: {e} (código {code})")
            if code is None or code >= 0:
                return -1
            return code
