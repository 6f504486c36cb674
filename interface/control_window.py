"""
=================================================================================================================
                                                Classe ControlUnitWindow
=================================================================================================================
- Unidade de controle virtual do braço
    - Botões de "segurar": pressionar envia o movimento, soltar envia STOP para o atuador
    - Luz: par de botões exclusivos (Ligar/Desligar)
    - Conectar/Desconectar chamam diretamente o RoboticArmUsb
    - Um QTimer consulta get_status() periodicamente (erros de I/O da thread de controle)
    - Fechar a janela desconecta o braço (atuadores parados)

Campos deste código:
["Setup Inicial"]:              Inicialização, Timer de status
["Criando a User Interface"]:   Grupos de botões (Conexão, Movimento, Luz, Status)
["Handlers dos Botões"]:        Conexão, movimento, luz
["Fechar a Aplicação"]:         Desconecta ao fechar a janela
"""
import logging

from PyQt6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                             QGridLayout, QLabel, QPushButton, QGroupBox, QButtonGroup)
from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QFont

from config import ArmParameters
from robotic_arm import Action, Actuator, ConnectionStatus, RoboticArmUsb


# (atuador, rótulo, [(ação, texto do botão), ...])
MOTION_LAYOUT = [
    (Actuator.GRIPPER, "Garra", [(Action.CLOSE, "Fechar"), (Action.OPEN, "Abrir")]),
    (Actuator.WRIST, "Pulso", [(Action.UP, "Subir"), (Action.DOWN, "Descer")]),
    (Actuator.ELBOW, "Cotovelo", [(Action.UP, "Subir"), (Action.DOWN, "Descer")]),
    (Actuator.SHOULDER, "Ombro", [(Action.UP, "Subir"), (Action.DOWN, "Descer")]),
    (Actuator.BASE, "Base", [(Action.CCW, "Anti-horário"), (Action.CW, "Horário")]),
]


class ControlUnitWindow(QMainWindow):
    """Unidade de controle virtual"""

    """
    =================================================================================================================
                                                Setup inicial
    =================================================================================================================
    """

    """--------------------------- __init__() ---------------------------"""
    def __init__(self, arm=None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Controle Braço Robótico USB")
        self._logger = logging.getLogger("robotic_arm.interface")

        self.arm = arm if arm is not None else RoboticArmUsb()
        self.motion_buttons = {}

        self.init_ui()
        self.setFixedSize(self.sizeHint())

        # Consulta periódica do status
        self.status_timer = QTimer(self)
        self.status_timer.timeout.connect(self.refresh_status)
        self.status_timer.start(ArmParameters.STATUS_REFRESH_MS)

        self.set_status_message(self.arm.get_status())

    """
    =================================================================================================================
                                                Criando a User Interface
    =================================================================================================================
    """

    def init_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)
        layout.setSpacing(5)

        title = QLabel("Robotic Arm Edge")
        title.setFont(QFont("Arial", 16, QFont.Weight.Bold))
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("QLabel { color: #2E7D32; padding: 10px; }")
        layout.addWidget(title)

        layout.addWidget(self.create_connection_group())
        layout.addWidget(self.create_motion_group())
        layout.addWidget(self.create_light_group())
        layout.addWidget(self.create_status_group())
        layout.addStretch()

    """--------------------------- Conexão ---------------------------"""
    def create_connection_group(self):
        group = QGroupBox("Conexão")
        layout = QHBoxLayout(group)

        self.button_connect = QPushButton("Conectar")
        self.button_disconnect = QPushButton("Desconectar")
        self.button_connect.clicked.connect(self.on_connect_clicked)
        self.button_disconnect.clicked.connect(self.on_disconnect_clicked)

        layout.addWidget(self.button_connect)
        layout.addWidget(self.button_disconnect)
        return group

    """--------------------------- Movimento (segurar para mover) ---------------------------"""
    def create_motion_group(self):
        group = QGroupBox("Movimento")
        layout = QGridLayout(group)
        layout.setVerticalSpacing(4)
        layout.setHorizontalSpacing(5)

        for row, (actuator, label, actions) in enumerate(MOTION_LAYOUT):
            layout.addWidget(QLabel(f"{label}:"), row, 0,
                             Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            for column, (action, text) in enumerate(actions, start=1):
                button = QPushButton(text)
                button.setAutoRepeat(False)
                button.pressed.connect(
                    lambda a=actuator, b=action: self.on_motion_pressed(a, b))
                button.released.connect(
                    lambda a=actuator: self.on_motion_released(a))
                self.motion_buttons[(actuator, action)] = button
                layout.addWidget(button, row, column)
        return group

    """--------------------------- Luz ---------------------------"""
    def create_light_group(self):
        group = QGroupBox("Luz")
        layout = QHBoxLayout(group)

        self.button_light_off = QPushButton("Desligar")
        self.button_light_on = QPushButton("Ligar")
        self.light_group = QButtonGroup(self)
        self.light_group.setExclusive(True)
        for button in (self.button_light_off, self.button_light_on):
            button.setCheckable(True)
            self.light_group.addButton(button)
            layout.addWidget(button)
        self.button_light_off.setChecked(True)

        self.button_light_off.pressed.connect(lambda: self.on_light_pressed(Action.OFF))
        self.button_light_on.pressed.connect(lambda: self.on_light_pressed(Action.ON))
        return group

    """--------------------------- Status ---------------------------"""
    def create_status_group(self):
        group = QGroupBox("Status")
        layout = QHBoxLayout(group)
        self.label_status = QLabel()
        self.label_status.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.label_status)
        return group

    """
    =================================================================================================================
                                                Handlers dos Botões
    =================================================================================================================
    """

    def on_connect_clicked(self):
        status = self.arm.connect()
        if status == ConnectionStatus.CONNECTED:
            # Reenvia o estado da luz selecionado na interface
            action = Action.ON if self.button_light_on.isChecked() else Action.OFF
            self.arm.send_command(Actuator.LIGHT, action)
        self.set_status_message(status)

    def on_disconnect_clicked(self):
        self.set_status_message(self.arm.disconnect())

    def on_motion_pressed(self, actuator: Actuator, action: Action):
        self.set_status_message(self.arm.send_command(actuator, action))

    def on_motion_released(self, actuator: Actuator):
        self.set_status_message(self.arm.send_command(actuator, Action.STOP))

    def on_light_pressed(self, action: Action):
        self.set_status_message(self.arm.send_command(Actuator.LIGHT, action))

    def refresh_status(self):
        self.set_status_message(self.arm.get_status())

    def set_status_message(self, status):
        """Mostra o status com a primeira letra maiúscula"""
        message = RoboticArmUsb.get_status_string(status)
        self.label_status.setText(message[:1].upper() + message[1:])

    """
    =================================================================================================================
                                                Fechar a Aplicação
    =================================================================================================================
    """

    def closeEvent(self, event):
        """Evento de fechamento"""
        self.status_timer.stop()
        try:
            self.arm.disconnect()
        except Exception as e:
            self._logger.exception(f"Erro ao desconectar ao fechar: {e}")
        event.accept()
