"""
Configuração e fixtures compartilhadas para pytest

Este arquivo é automaticamente carregado pelo pytest e disponibiliza
fixtures para todos os testes.
"""
import os
import pytest
import sys
from pathlib import Path

# Adiciona o diretório raiz ao path para imports
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

# Testes de interface rodam sem display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from robotic_arm import RoboticArmUsb  # noqa: E402
from tests.mock_arm import MockUsbTransport  # noqa: E402


@pytest.fixture
def transport():
    """Transporte USB simulado com o braço presente"""
    return MockUsbTransport()


@pytest.fixture
def arm(transport):
    """RoboticArmUsb sobre o transporte simulado (desconectado ao final)"""
    controller = RoboticArmUsb(transport)
    yield controller
    transport.hold.set()
    controller.disconnect()


@pytest.fixture
def connected_arm(arm, transport):
    """RoboticArmUsb já conectado (transferência de inicialização concluída)"""
    arm.connect()
    return arm


@pytest.fixture
def scenario_words():
    """Sequência esperada: init -> garra fecha -> pulso sobe -> teardown"""
    return [0x00000000, 0x00000001, 0x00000005, 0x00000000]
