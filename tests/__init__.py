"""
Pacote de testes do controlador USB do braço robótico

Estrutura:
- test_protocol.py: Testes da codificação da palavra de comando
- test_usb_transport.py: Testes do transporte pyusb (pyusb mockado)
- test_control_state.py: Testes do estado compartilhado (status + palavra de comando)
- test_control_worker.py: Testes da thread de controle
- test_arm_controller.py: Testes do RoboticArmUsb (conexão, comandos, concorrência)
- test_control_window.py: Testes da unidade de controle virtual (pytest-qt)
- test_light_demo.py: Testes da demonstração e da linha de comando
- mock_arm.py: Transporte USB simulado para testes
- conftest.py: Fixtures compartilhadas do pytest

Como rodar:
    pytest tests/                       # Todos os testes
    pytest tests/test_protocol.py       # Teste específico
    pytest -v tests/                    # Modo verbose
    pytest --cov=robotic_arm tests/     # Com cobertura
"""

__version__ = "1.0.0"
