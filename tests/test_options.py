import itertools
import unittest

import numpy as np

from tep_group_viz.core.options import merge_option_pairs, resolve_options
from _synthetic import make_recording


class TestResolveOptions(unittest.TestCase):
    def setUp(self) -> None:
        self.base = make_recording(
            roi={"R1": np.zeros(14), "R2": np.ones(14)},
            gmfa={"G1": np.ones(14)},
        )

    def test_defaults(self) -> None:
        opts = resolve_options(self.base)
        self.assertEqual(opts.xlim, (-100.0, 500.0))
        self.assertIsNone(opts.ylim)
        self.assertIsNone(opts.elec)
        self.assertFalse(opts.ci)
        self.assertEqual(opts.tep_type, "data")
        self.assertIsNone(opts.tep_name)
        self.assertTrue(opts.butterfly)

    def test_xlim_within_range(self) -> None:
        opts = resolve_options(self.base, "xlim", [-100, 500])
        self.assertEqual(opts.xlim, (-100.0, 500.0))

    def test_xlim_at_data_edges(self) -> None:
        opts = resolve_options(self.base, "xlim", (-500, 800))
        self.assertEqual(opts.xlim, (-500.0, 800.0))

    def test_xlim_outside_range_names_valid_range(self) -> None:
        with self.assertRaisesRegex(ValueError, r"\(-500 to 800\)"):
            resolve_options(self.base, "xlim", [-1000, 500])

    def test_xlim_outside_range_always_fails(self) -> None:
        others = [
            (),
            ("elec", "Cz", "CI", "on"),
            ("tepType", "ROI", "tepName", "R2"),
            ("tepType", "GMFA", "ylim", [-5, 5]),
        ]
        for bad in ([-100, 900], [-600, 0], [900, 1000]):
            for extra in others:
                with self.subTest(xlim=bad, extra=extra):
                    with self.assertRaises(ValueError):
                        resolve_options(self.base, "xlim", bad, *extra)

    def test_xlim_wrong_shape(self) -> None:
        for bad in ([0], [0, 1, 2], "abc", None):
            with self.subTest(xlim=bad):
                with self.assertRaisesRegex(ValueError, r"\[min,max\]"):
                    resolve_options(self.base, "xlim", bad)

    def test_xlim_column_pair_is_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, r"\[min,max\]"):
            resolve_options(self.base, "xlim", [[-100], [500]])
        self.assertEqual(resolve_options(self.base, "xlim", [[-100, 500]]).xlim, (-100.0, 500.0))

    def test_non_finite_limits_are_rejected(self) -> None:
        for key in ("xlim", "ylim"):
            for bad in ([float("nan"), 500], [-100, float("inf")], np.array([np.nan, np.nan])):
                with self.subTest(key=key, value=bad):
                    with self.assertRaisesRegex(ValueError, rf"'{key}'.*\[min,max\]"):
                        resolve_options(self.base, key, bad)

    def test_ylim(self) -> None:
        self.assertEqual(resolve_options(self.base, "ylim", [-10, 10]).ylim, (-10.0, 10.0))
        self.assertIsNone(resolve_options(self.base, "ylim", []).ylim)
        with self.assertRaisesRegex(ValueError, "ylim"):
            resolve_options(self.base, "ylim", [1, 2, 3])

    def test_odd_number_of_arguments(self) -> None:
        with self.assertRaisesRegex(ValueError, "key/value pairs"):
            resolve_options(self.base, "xlim")

    def test_unknown_key_is_named(self) -> None:
        with self.assertRaisesRegex(KeyError, "colour"):
            resolve_options(self.base, "colour", "red")

    def test_keys_are_case_insensitive(self) -> None:
        opts = resolve_options(self.base, "TEPTYPE", "GMFA", "ci", "on")
        self.assertEqual(opts.tep_type, "GMFA")
        self.assertTrue(opts.ci)
        opts = resolve_options(self.base, "tep_type", "ROI", "tep_name", "R1")
        self.assertEqual(opts.tep_name, "R1")

    def test_ci_value(self) -> None:
        self.assertTrue(resolve_options(self.base, "elec", "Cz", "CI", "on").ci)
        for bad in ("yes", "ON", True, 1):
            with self.subTest(ci=bad):
                with self.assertRaisesRegex(ValueError, "'on' or 'off'"):
                    resolve_options(self.base, "elec", "Cz", "CI", bad)

    def test_ci_with_butterfly_always_fails(self) -> None:
        xlims = ([-100, 500], [-500, 800], [0, 100])
        ylims = (None, [-10, 10])
        names = (None, "")
        for xlim, ylim, elec in itertools.product(xlims, ylims, names):
            with self.subTest(xlim=xlim, ylim=ylim, elec=elec):
                with self.assertRaisesRegex(ValueError, "butterfly"):
                    resolve_options(self.base, "xlim", xlim, "ylim", ylim, "elec", elec, "CI", "on")

    def test_ci_allowed_for_roi_and_gmfa(self) -> None:
        self.assertTrue(resolve_options(self.base, "tepType", "ROI", "tepName", "R1", "CI", "on").ci)
        self.assertTrue(resolve_options(self.base, "tepType", "GMFA", "CI", "on").ci)

    def test_invalid_tep_type(self) -> None:
        with self.assertRaisesRegex(ValueError, "tepType"):
            resolve_options(self.base, "tepType", "all")

    def test_missing_analysis(self) -> None:
        bare = make_recording()
        for tep_type in ("ROI", "GMFA"):
            with self.subTest(tep_type=tep_type):
                with self.assertRaisesRegex(ValueError, "tesa_tepextract"):
                    resolve_options(bare, "tepType", tep_type)

    def test_multiple_instances_need_name(self) -> None:
        with self.assertRaisesRegex(ValueError, "multiple ROIs"):
            resolve_options(self.base, "tepType", "ROI")
        opts = resolve_options(self.base, "tepType", "ROI", "tepName", "R2")
        self.assertEqual(opts.tep_name, "R2")

    def test_single_instance_is_selected(self) -> None:
        for _ in range(3):
            opts = resolve_options(self.base, "tepType", "GMFA")
            self.assertEqual(opts.tep_name, "G1")

    def test_tep_name_requires_roi_or_gmfa(self) -> None:
        with self.assertRaisesRegex(ValueError, "tepType"):
            resolve_options(self.base, "tepName", "R1")

    def test_unknown_tep_name_is_named(self) -> None:
        with self.assertRaisesRegex(KeyError, "R9"):
            resolve_options(self.base, "tepType", "ROI", "tepName", "R9")
        with self.assertRaisesRegex(KeyError, "R1"):
            resolve_options(self.base, "tepType", "GMFA", "tepName", "R1")

    def test_config_defaults_apply_and_are_overridden(self) -> None:
        defaults = {"xlim": [-200, 600], "tep_type": "GMFA"}
        opts = resolve_options(self.base, defaults=defaults)
        self.assertEqual(opts.xlim, (-200.0, 600.0))
        self.assertEqual(opts.tep_type, "GMFA")
        opts = resolve_options(self.base, "tepType", "data", defaults=defaults)
        self.assertEqual(opts.tep_type, "data")


class TestMergeOptionPairs(unittest.TestCase):
    def test_unknown_default_key(self) -> None:
        with self.assertRaises(KeyError):
            merge_option_pairs((), {"colour": "red"})

    def test_last_pair_wins(self) -> None:
        merged = merge_option_pairs(("elec", "Cz", "elec", "Pz"))
        self.assertEqual(merged["elec"], "Pz")


if __name__ == "__main__":
    unittest.main()
