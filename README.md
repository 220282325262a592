# aedsim

`aedsim` simulates an automated external defibrillator (AED) for training.
The device walks through a fixed sequence of spoken prompts: self-test,
check responsiveness, call for help, attach the pads, analyse the heart
rhythm, deliver a shock when one is advised, and coach the rescuer through
CPR.

All timing runs on a virtual clock (`aedsim.clock.Scheduler`), so nothing
happens until time is moved forward. A whole rescue can be played through
in an instant, which suits scenario scripts and automated checks.

## Installing

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Running the simulator

```
aedsim [SCRIPT]
```

Commands are read one per line from `SCRIPT`, or from standard input when
no file is given. Text after `#` is ignored, as are blank lines. After each
command the prompts the device played are printed, each stamped with the
time of day, for example `[14:02:11]: Call for help.`

| Command      | Effect                                                      |
|--------------|-------------------------------------------------------------|
| `power`      | press the power button                                      |
| `wait MS`    | let `MS` milliseconds of virtual time pass                  |
| `shock`      | press the shock button                                      |
| `patient N`  | patient's condition: 0 none, 1 VT, 2 VF, 3 asystole, 4 PEA  |
| `type N`     | patient type: 0 adult, 1 child, 2 infant                    |
| `pads N`     | electrode pads detached (0) or attached (1)                 |
| `battery N`  | set the battery level (kept within 0–100)                   |
| `recharge`   | recharge the batteries to 100 and switch the unit off       |
| `electrodes` | install or uninstall the electrodes                         |
| `end N`      | outcome: 0 none, 1 EMS arrives, 2 CPR revives, 3 shock revives, 4 patient dies |
| `status`     | show state, battery, shock count, elapsed time, status lamp, ECG rhythm and, during CPR, the compression meter |
| `help`       | list the commands                                           |
| `quit`       | stop (`exit` also works)                                    |

A bad command prints `error: ...` and the session carries on; the exit
status is then 1 instead of 0.

A short scenario:

```
power
wait 7000        # self-test and "Stay calm."
wait 10000       # check responsiveness, call for help
pads 1
patient 2        # ventricular fibrillation
wait 20000
shock
wait 10000
status
```

## What the device does

- **Powering on.** The unit only switches on with some charge left. While
  switched off it beeps every two seconds if the battery is below 40%.
- **Self-test.** The unit fails the self-test and asks for new batteries if
  the charge is below 40%, or asks for the electrodes if they are not
  installed. Otherwise the status lamp shows passed. An empty battery always
  shows the failed lamp.
- **Pads.** The device checks every two seconds until the pads are attached.
- **Rhythm analysis.** Analysis waits until a patient condition is chosen.
  Pulseless ventricular tachycardia and ventricular fibrillation are
  shockable: the shock indicator flashes and the device waits for the shock
  button. Asystole and pulseless electrical activity are not shockable, and
  the device goes straight to CPR.
- **Shocks.** Each shock uses 10% of the battery and adds one to the shock
  count, which returns to zero when the unit powers off. With less than 10%
  the device says there is not enough battery to shock. After a shock, an
  empty battery powers the unit off and one below 40% asks for new batteries.
- **CPR.** The chest compression meter, sized for the chosen patient type,
  shows too-deep, too-shallow and good compressions before the device stops
  CPR and analyses again.
- **Ending a scenario.** Emergency services can arrive (the unit powers off),
  CPR or a shock can revive the patient (the trace shows a regular rhythm and
  the unit powers off), or the patient can die, which makes the rhythm
  asystole and turns the trace flat during analysis or CPR. Powering off
  clears the chosen outcome.

Removing the electrodes part-way through interrupts the rescue; installing
them again restarts the step the device was on from its beginning.

## Using it from Python

- `aedsim.device.AED` is the device: its current `state`, `battery`,
  `shock_count`, `ecg` trace, `status_lamp`, `elapsed_clock`, and the
  `console` and `messages` logs. `toggle_power()` presses the power button
  and `press_shock_button()` the shock button.
- `aedsim.controls.ControlPanel` plays the instructor, with
  `select_patient_status`, `select_patient_type`, `select_pad_attachment`,
  `update_battery`, `recharge_batteries`, `toggle_electrodes` and
  `select_end_program`.
- `aedsim.clock.Scheduler` is the virtual clock; `advance(ms)` moves time
  forward and runs whatever falls due.
- `aedsim.states` holds one class per step of the rescue, from
  `PoweredOffState` to `PerformCPRState`, and `state_for_name`.
- `aedsim.ecg` provides `Waveform`, `waveform_samples` and `ECGTrace`.
- `aedsim.cli.run_commands(lines, aed, panel, out)` runs commands against a
  device of your own.

```python
from aedsim.controls import ControlPanel
from aedsim.device import AED

aed = AED()
panel = ControlPanel(aed)
aed.toggle_power()
aed.scheduler.advance(7000)
print(aed.state.name)      # CheckResponsivenessState
print(aed.messages)
```

## What it does not do

There is no graphical display and no sound. The lights, meter and status
lamp are modelled by the image file names they would show
(`StepLight.image`, `ShockIndicator.image`, `StatusLamp`,
`ChestCompressionMeter.image_name()`), but no images are included, and the
ECG trace is a list of points rather than a plot. Prompts are text only.