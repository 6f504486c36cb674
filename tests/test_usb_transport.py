"""
Testes para o UsbTransport

Usa mocks do pyusb (usb.core / usb.util / backend libusb).
Não requer hardware nem libusb instalada.
"""
import pytest
from unittest.mock import Mock, patch

import usb.core

from config import ArmParameters
from robotic_arm import TransportError, TransportInitError, UsbTransport


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def backend():
    return Mock(name="libusb1-backend")


@pytest.fixture
def usb_transport(backend):
    return UsbTransport(backend=backend)


def make_device(vendor_id, product_id):
    device = Mock()
    device.idVendor = vendor_id
    device.idProduct = product_id
    device.bus = 1
    device.address = 7
    return device


# =============================================================================
# Testes de Inicialização
# =============================================================================

class TestInitialization:
    """Testa resolução do backend libusb"""

    def test_missing_backend_raises(self):
        """Sem libusb, o construtor falha"""
        with patch("usb.backend.libusb1.get_backend", return_value=None):
            with pytest.raises(TransportInitError):
                UsbTransport()

    def test_init_error_is_transport_error(self):
        assert issubclass(TransportInitError, TransportError)

    def test_default_backend(self, backend):
        with patch("usb.backend.libusb1.get_backend", return_value=backend) as get_backend:
            UsbTransport()
        get_backend.assert_called_once()


# =============================================================================
# Testes de Descoberta
# =============================================================================

class TestFindDevice:
    """Testa enumeração por vendor/product"""

    def test_returns_first_match(self, usb_transport, backend):
        other = make_device(0x046D, 0xC52B)
        arm_a = make_device(ArmParameters.VENDOR_ID, ArmParameters.PRODUCT_ID)
        arm_b = make_device(ArmParameters.VENDOR_ID, ArmParameters.PRODUCT_ID)

        with patch("usb.core.find", return_value=iter([other, arm_a, arm_b])) as find:
            found = usb_transport.find_device(ArmParameters.VENDOR_ID, ArmParameters.PRODUCT_ID)

        assert found is arm_a
        find.assert_called_once_with(find_all=True, backend=backend)

    def test_returns_none_when_absent(self, usb_transport):
        devices = [make_device(0x046D, 0xC52B), make_device(0x1267, 0x0001)]
        with patch("usb.core.find", return_value=iter(devices)):
            assert usb_transport.find_device(0x1267, 0x0000) is None


# =============================================================================
# Testes de Abertura / Interface
# =============================================================================

class TestOpenAndClaim:
    """Testa abertura, interface e fechamento"""

    def test_open_detaches_kernel_driver(self, usb_transport):
        device = make_device(0x1267, 0x0000)
        device.is_kernel_driver_active.return_value = True

        handle = usb_transport.open(device)

        assert handle is device
        device.detach_kernel_driver.assert_called_once_with(ArmParameters.INTERFACE)

    def test_open_without_kernel_driver(self, usb_transport):
        device = make_device(0x1267, 0x0000)
        device.is_kernel_driver_active.return_value = False

        usb_transport.open(device)

        device.detach_kernel_driver.assert_not_called()

    def test_open_unsupported_platform(self, usb_transport):
        """NotImplementedError (Windows/macOS) não é falha"""
        device = make_device(0x1267, 0x0000)
        device.is_kernel_driver_active.side_effect = NotImplementedError

        assert usb_transport.open(device) is device

    def test_open_access_denied(self, usb_transport):
        device = make_device(0x1267, 0x0000)
        device.is_kernel_driver_active.side_effect = usb.core.USBError("Access denied", -3)

        with pytest.raises(TransportError):
            usb_transport.open(device)

    def test_claim_interface(self, usb_transport):
        handle = make_device(0x1267, 0x0000)
        with patch("usb.util.claim_interface") as claim:
            usb_transport.claim_interface(handle, 0)
        claim.assert_called_once_with(handle, 0)

    def test_claim_interface_busy(self, usb_transport):
        handle = make_device(0x1267, 0x0000)
        with patch("usb.util.claim_interface", side_effect=usb.core.USBError("Resource busy", -6)):
            with pytest.raises(TransportError):
                usb_transport.claim_interface(handle, 0)

    def test_release_interface_failure(self, usb_transport):
        handle = make_device(0x1267, 0x0000)
        with patch("usb.util.release_interface", side_effect=usb.core.USBError("No device", -4)):
            with pytest.raises(TransportError):
                usb_transport.release_interface(handle, 0)

    def test_close_disposes_resources(self, usb_transport):
        handle = make_device(0x1267, 0x0000)
        with patch("usb.util.dispose_resources") as dispose:
            usb_transport.close(handle)
        dispose.assert_called_once_with(handle)


# =============================================================================
# Testes de Control Transfer
# =============================================================================

class TestControlTransfer:
    """Testa o envio da palavra de comando"""

    def test_fixed_request_parameters(self, usb_transport):
        handle = make_device(0x1267, 0x0000)
        handle.ctrl_transfer.return_value = 4
        payload = b"\x01\x00\x00\x00"

        sent = usb_transport.control_transfer(handle, payload)

        assert sent == 4
        handle.ctrl_transfer.assert_called_once_with(0x40, 0x06, 0x100, 0, payload, timeout=0)

    def test_partial_transfer_is_returned(self, usb_transport):
        handle = make_device(0x1267, 0x0000)
        handle.ctrl_transfer.return_value = 2

        assert usb_transport.control_transfer(handle, b"\x00" * 4) == 2

    def test_usb_error_returns_backend_code(self, usb_transport):
        """Erro USB vira código negativo, sem exceção"""
        handle = make_device(0x1267, 0x0000)
        handle.ctrl_transfer.side_effect = usb.core.USBError("No such device", -4)

        assert usb_transport.control_transfer(handle, b"\x00" * 4) == -4

    def test_usb_error_without_code(self, usb_transport):
        handle = make_device(0x1267, 0x0000)
        handle.ctrl_transfer.side_effect = usb.core.USBError("Timeout")

        assert usb_transport.control_transfer(handle, b"\x00" * 4) == -1


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
