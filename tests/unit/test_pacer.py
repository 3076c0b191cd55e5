import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
for pkg in ("core", "container", "renderer", "stream"):
    sys.path.insert(0, str(ROOT / "packages" / pkg))

from asciireel_core.pacer import Pacer


class FakeClock:
    def __init__(self):
        self.now = 100.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class PacerTests(unittest.TestCase):
    def test_frame_delay(self):
        self.assertEqual(Pacer(24).frame_delay_us, 41666)
        self.assertEqual(Pacer(25).frame_delay_us, 40000)

    def test_remaining_never_negative(self):
        pacer = Pacer(25)
        self.assertEqual(pacer.remaining_us(40000), 0)
        self.assertEqual(pacer.remaining_us(90000), 0)
        self.assertEqual(pacer.remaining_us(15000), 25000)
        self.assertEqual(pacer.remaining_us(0), 40000)

    def test_pace_sleeps_for_unused_budget(self):
        clock = FakeClock()
        pacer = Pacer(25, clock=clock, sleep=clock.sleep)
        delivered = []

        clock.now += 0.010
        pacer.pace(lambda: delivered.append(clock.now))
        self.assertEqual(len(clock.sleeps), 1)
        self.assertAlmostEqual(clock.sleeps[0], 0.030, places=4)
        self.assertEqual(len(delivered), 1)
        self.assertEqual(pacer.late_frames, 0)

    def test_late_frame_is_not_compensated(self):
        clock = FakeClock()
        pacer = Pacer(25, clock=clock, sleep=clock.sleep)

        clock.now += 0.100
        self.assertEqual(pacer.pace(lambda: None), 0)
        self.assertEqual(clock.sleeps, [])
        self.assertEqual(pacer.late_frames, 1)

        # Next frame still gets its full budget measured from the late delivery.
        pacer.pace(lambda: None)
        self.assertAlmostEqual(clock.sleeps[0], 0.040, places=4)
        self.assertEqual(pacer.frames, 2)

    def test_rejects_zero_fps(self):
        with self.assertRaises(ValueError):
            Pacer(0)


if __name__ == "__main__":
    unittest.main()
