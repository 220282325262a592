"""Command-line front end that drives the simulator from typed commands."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Iterable, TextIO

from .controls import ControlPanel
from .device import AED

HELP = """\
Commands:
  power            press the power button
  wait MS          let MS milliseconds pass
  shock            press the shock button
  patient N        choose the patient's condition (0-4)
  type N           choose the patient type (0 adult, 1 child, 2 infant)
  pads N           attach (1) or detach (0) the electrode pads
  battery N        set the battery level
  recharge         recharge the batteries
  electrodes       install or uninstall the electrodes
  end N            choose how the scenario ends (0-4)
  status           show the device display
  help             show this text
  quit             stop
"""

_Action = Callable[[AED, ControlPanel], None]
_IntAction = Callable[[AED, ControlPanel, int], None]

_NO_ARGUMENT: dict[str, _Action] = {
    "power": lambda aed, panel: aed.toggle_power(),
    "shock": lambda aed, panel: aed.press_shock_button(),
    "recharge": lambda aed, panel: panel.recharge_batteries(),
    "electrodes": lambda aed, panel: panel.toggle_electrodes(),
}

_INT_ARGUMENT: dict[str, _IntAction] = {
    "wait": lambda aed, panel, n: aed.scheduler.advance(n),
    "patient": lambda aed, panel, n: panel.select_patient_status(n),
    "type": lambda aed, panel, n: panel.select_patient_type(n),
    "pads": lambda aed, panel, n: panel.select_pad_attachment(n),
    "battery": lambda aed, panel, n: panel.update_battery(n),
    "end": lambda aed, panel, n: panel.select_end_program(n),
}


def _status_lines(aed: AED) -> list[str]:
    waveform = aed.ecg.waveform
    meter = aed.chest_compression_meter
    lines = [
        f"State: {aed.state.name}",
        aed.battery_label,
        aed.shock_count_label,
        aed.elapsed_clock.text,
        f"Status lamp: {aed.status_lamp.name.lower()}",
        f"ECG: {waveform.value if waveform is not None else 'none'}",
    ]
    if meter.visible:
        lines.append(f"Compression meter: {meter.image_name()}")
    return lines


def _dispatch(name: str, args: list[str], aed: AED, panel: ControlPanel, out: TextIO) -> None:
    if name == "help":
        out.write(HELP)
    elif name == "status":
        out.write("".join(f"{line}\n" for line in _status_lines(aed)))
    elif name in _NO_ARGUMENT:
        if args:
            raise ValueError(f"{name} takes no argument")
        _NO_ARGUMENT[name](aed, panel)
    elif name in _INT_ARGUMENT:
        if len(args) != 1:
            raise ValueError(f"{name} takes one number")
        try:
            value = int(args[0])
        except ValueError:
            raise ValueError(f"not a number: {args[0]!r}") from None
        _INT_ARGUMENT[name](aed, panel, value)
    else:
        raise ValueError(f"unknown command: {name!r}")


def run_commands(lines: Iterable[str], aed: AED, panel: ControlPanel, out: TextIO) -> int:
    """Run commands, writing prompts and results to ``out``.

    Returns 0 if every command succeeded, otherwise 1.
    """
    shown = len(aed.console)
    status = 0
    for raw in lines:
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        name, *args = line.split()
        name = name.lower()
        if name in ("quit", "exit"):
            break
        try:
            _dispatch(name, args, aed, panel, out)
        except (ValueError, IndexError) as exc:
            out.write(f"error: {exc}\n")
            status = 1
        for entry in aed.console[shown:]:
            out.write(f"{entry}\n")
        shown = len(aed.console)
    return status


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="aedsim",
        description="Automated external defibrillator training simulator.",
        epilog=HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("script", nargs="?", help="file of commands (default: standard input)")
    options = parser.parse_args(argv)

    aed = AED()
    panel = ControlPanel(aed)
    if options.script is None:
        return run_commands(sys.stdin, aed, panel, sys.stdout)
    try:
        with open(options.script, encoding="utf-8") as script:
            return run_commands(script, aed, panel, sys.stdout)
    except OSError as exc:
        parser.error(f"cannot read {options.script}: {exc.strerror}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())