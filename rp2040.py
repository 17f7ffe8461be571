# rp2040.py
import logging
from typing import Callable, Iterable, Optional

import serial
import serial.tools.list_ports

from errors import DeviceNotFoundError
from settings import ScreenConfig

logger = logging.getLogger(__name__)


def matches(port_info, vid: int, pid: int) -> bool:
    """True when the port's USB descriptor reports exactly vid:pid."""
    return port_info.vid == vid and port_info.pid == pid


def find_port(config: ScreenConfig, ports: Iterable) -> Optional[str]:
    """
    Return the device name of the first port matching config.vid/pid.

    Several matches: the first in enumeration order wins. The order comes
    from the OS, so with two identical controllers attached the choice is
    not guaranteed to be stable between runs.
    """
    for port_info in ports:
        if matches(port_info, config.vid, config.pid):
            return port_info.device
    return None


def open_named(
    device: str,
    config: ScreenConfig,
    open_port: Callable = serial.Serial,
):
    """Open `device` at config.baud with the transport's default 8N1 framing."""
    try:
        ser = open_port(device, config.baud)
    except (serial.SerialException, OSError) as exc:
        raise DeviceNotFoundError(f"Cannot open {device}: {exc}") from exc
    logger.info("Opened %s at %d baud", device, config.baud)
    return ser


def locate_and_open(
    config: ScreenConfig,
    list_ports: Callable = serial.tools.list_ports.comports,
    open_port: Callable = serial.Serial,
):
    """Single-shot probe: find the display controller and open it. No retry."""
    ports = list(list_ports())
    device = find_port(config, ports)
    if device is None:
        raise DeviceNotFoundError(
            f"No serial port with USB id {config.vid:04X}:{config.pid:04X} "
            f"({len(ports)} ports checked)"
        )
    logger.info("RP2040 found on %s", device)
    return open_named(device, config, open_port=open_port)


def describe_ports(
    config: ScreenConfig,
    list_ports: Callable = serial.tools.list_ports.comports,
):
    """One human-readable line per serial port; matching ports are starred."""
    lines = []
    for p in list_ports():
        if p.vid is None:
            usb_id = "----:----"
        else:
            usb_id = f"{p.vid:04X}:{p.pid or 0:04X}"
        mark = "*" if matches(p, config.vid, config.pid) else " "
        lines.append(f"{mark} {p.device}  {usb_id}  {p.description}")
    return lines
