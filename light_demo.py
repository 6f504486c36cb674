"""
Demonstração da conexão com o braço: liga e desliga a luz.

Sequência:
    status -> connect -> connect (ignorado) -> luz on -> luz off -> luz on
    -> disconnect (apaga a luz) -> disconnect (ignorado)

Uso:
    python light_demo.py --pause 1.0
"""
import argparse
import logging
import time
from typing import List, Tuple

from config import ArmParameters
from robotic_arm import Action, Actuator, ConnectionStatus, RoboticArmUsb


def run(arm: RoboticArmUsb, pause_s: float = 1.0) -> List[Tuple[str, ConnectionStatus]]:
    """
    Executa a sequência de demonstração

    Args:
        arm: Controlador do braço (não conectado)
        pause_s: Pausa entre os passos em segundos

    Returns:
        Lista de (passo, status retornado)
    """
    logger = logging.getLogger("robotic_arm.demo")
    steps = [
        ("status", arm.get_status),
        ("connect", arm.connect),
        ("connect (novamente, ignorado)", arm.connect),
        ("luz on", lambda: arm.send_command(Actuator.LIGHT, Action.ON)),
        ("luz off", lambda: arm.send_command(Actuator.LIGHT, Action.OFF)),
        ("luz on", lambda: arm.send_command(Actuator.LIGHT, Action.ON)),
        ("disconnect (apaga a luz)", arm.disconnect),
        ("disconnect (novamente, ignorado)", arm.disconnect),
    ]

    results = []
    for name, step in steps:
        status = step()
        logger.info(f"{name:<34} ==> '{arm.get_status_string(status)}'")
        results.append((name, status))
        time.sleep(pause_s)
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description="Demonstração: luz do braço robótico")
    parser.add_argument("--vendor-id", type=lambda v: int(v, 0), default=ArmParameters.VENDOR_ID)
    parser.add_argument("--product-id", type=lambda v: int(v, 0), default=ArmParameters.PRODUCT_ID)
    parser.add_argument("--pause", type=float, default=1.0, help="Pausa entre passos [s]")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format="[%(levelname)s] %(name)s: %(message)s")

    with RoboticArmUsb(vendor_id=args.vendor_id, product_id=args.product_id) as arm:
        run(arm, args.pause)


if __name__ == "__main__":
    main()
