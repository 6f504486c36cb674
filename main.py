"""
=================================================================================================================
                                                Função Principal
=================================================================================================================
"""
import sys
import argparse
import logging
from PyQt6.QtWidgets import QApplication, QMessageBox
from config import ArmParameters
from interface import ControlUnitWindow
from robotic_arm import RoboticArmUsb


def parse_args(argv=None):
    """Argumentos de linha de comando (ids aceitam hexadecimal, ex.: 0x1267)"""
    parser = argparse.ArgumentParser(description="Unidade de controle virtual do braço robótico USB")
    parser.add_argument("--vendor-id", type=lambda v: int(v, 0), default=ArmParameters.VENDOR_ID,
                        help="Vendor ID USB do braço")
    parser.add_argument("--product-id", type=lambda v: int(v, 0), default=ArmParameters.PRODUCT_ID,
                        help="Product ID USB do braço")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    return parser.parse_args(argv)


def main():
    """Função principal da aplicação"""
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="[%(levelname)s] %(name)s: %(message)s")

    try:
        app = QApplication(sys.argv)
        app.setApplicationName("Controle Braço Robótico USB")
        app.setApplicationVersion("1.0")

        app.setStyleSheet("""
            QMainWindow {
                background-color: #f8f9fa;
            }

            QGroupBox {
                font-weight: bold;
                border: 2px solid #dee2e6;
                border-radius: 8px;
                margin-top: 1ex;
                padding-top: 15px;
                background-color: white;
            }

            QPushButton {
                background-color: #28a745;
                border: none;
                color: white;
                padding: 10px 20px;
                border-radius: 6px;
                font-weight: bold;
            }

            QPushButton:pressed, QPushButton:checked {
                background-color: #1e7e34;
            }
        """)

        # Falha do libusb é fatal
        arm = RoboticArmUsb(vendor_id=args.vendor_id, product_id=args.product_id)

        window = ControlUnitWindow(arm)
        window.show()

        sys.exit(app.exec())

    except Exception as e:
        logging.getLogger("robotic_arm").critical(f"Erro crítico na aplicação: {e}")
        if 'app' in locals():
            QMessageBox.critical(None, "Erro Crítico", f"Erro ao iniciar aplicação:\n{str(e)}")
        sys.exit(1)

if __name__ == "__main__":
    main()
