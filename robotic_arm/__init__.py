"""
=================================================================================================================
                                        Pacote de Controle do Braço Robótico USB
=================================================================================================================
Controla o braço Velleman KSR10 / OWI-535 pela interface USB.

Componentes:
- protocol: Atuadores, ações, status e codificação da palavra de comando
- usb_transport: Acesso ao dispositivo via pyusb (camada de transporte)
- control_worker: Thread que envia a palavra de comando ao dispositivo
- arm_controller: Gerenciador de alto nível (API principal)

Uso típico:
    from robotic_arm import RoboticArmUsb, Actuator, Action

    with RoboticArmUsb() as arm:
        arm.connect()
        arm.send_command(Actuator.LIGHT, Action.ON)
"""

from .protocol import (
    Action,
    Actuator,
    CommandDecoder,
    CommandEncoder,
    ConnectionStatus
)
from .control_state import ControlState
from .control_worker import ControlWorker
from .usb_transport import TransportError, TransportInitError, UsbTransport
from .arm_controller import ArmStateError, RoboticArmUsb

__all__ = [
    "Action",
    "Actuator",
    "CommandDecoder",
    "CommandEncoder",
    "ConnectionStatus",
    "ControlState",
    "ControlWorker",
    "TransportError",
    "TransportInitError",
    "UsbTransport",
    "ArmStateError",
    "RoboticArmUsb"
]
