"""
=================================================================================================================
                                                Classe Arm Parameters
=================================================================================================================
- Parâmetros do braço robótico (Velleman KSR10 / OWI-535 "Robotic Arm Edge")
"""


class ArmParameters:
    """--------------------------- Identificação USB ---------------------------"""
    VENDOR_ID = 0x1267
    PRODUCT_ID = 0x0000
    INTERFACE = 0

    """--------------------------- Control transfer (host -> device) ---------------------------"""
    REQUEST_TYPE = 0x40     # vendor, host-to-device
    REQUEST = 0x06
    VALUE = 0x100
    INDEX = 0
    PAYLOAD_LENGTH = 4      # palavra de comando de 32 bits
    TIMEOUT_MS = 0          # 0 = sem timeout

    """--------------------------- Interface ---------------------------"""
    STATUS_REFRESH_MS = 500
