import unittest

from world.system.sanity_manager import (
    AbilityScores,
    SanityConfig,
    SanityTracker,
    TierChanged,
    calc_capacity,
    calc_sanity_tier,
)
from world.system.constants import TIER_COEFFICIENTS, SANITY_MODULE_ID


class FakeTrait:
    def __init__(self, value):
        self.value = value


class FakeTraits:
    def __init__(self, **scores):
        self.scores = dict(scores)

    def get(self, key):
        if key in self.scores:
            return FakeTrait(self.scores[key])
        return None


class FakeAttributes:
    def __init__(self):
        self.data = {}
        self.writes = 0

    def get(self, key, default=None, category=None):
        return self.data.get((key, category), default)

    def add(self, key, value, category=None):
        self.writes += 1
        self.data[(key, category)] = value


class FailingAttributes(FakeAttributes):
    def add(self, key, value, category=None):
        raise IOError("database is locked")


class Dummy:
    def __init__(self, cha=4, intel=3, wis=3):
        self.key = "Dummy"
        self.traits = FakeTraits(CHA=cha, INT=intel, WIS=wis, STR=10)
        self.attributes = FakeAttributes()


class NoTraits:
    def __init__(self):
        self.attributes = FakeAttributes()


class TestCalculations(unittest.TestCase):
    def test_capacity_doubles_sum(self):
        for cha, intel, wis in [(0, 0, 0), (4, 3, 3), (10, 10, 10), (1, 2, 30)]:
            self.assertEqual(calc_capacity(cha, intel, wis), 2 * (cha + intel + wis))

    def test_capacity_can_be_negative(self):
        self.assertEqual(calc_capacity(-3, 1, 0), -4)

    def test_full_pool_is_tier_zero(self):
        for capacity in (1, 20, 999):
            self.assertEqual(calc_sanity_tier(capacity, TIER_COEFFICIENTS, capacity), 0)

    def test_empty_pool_is_max_tier(self):
        self.assertEqual(calc_sanity_tier(20, TIER_COEFFICIENTS, 0), 6)

    def test_inactive_capacity(self):
        self.assertEqual(calc_sanity_tier(0, TIER_COEFFICIENTS, 0), 0)
        self.assertEqual(calc_sanity_tier(0, TIER_COEFFICIENTS, 5), 0)
        self.assertEqual(calc_sanity_tier(-10, TIER_COEFFICIENTS, 3), 0)

    def test_ratio_tiers(self):
        expected = {20: 0, 19: 0, 17: 0, 16: 1, 15: 1, 12: 2, 9: 2, 8: 3, 5: 3, 4: 4, 2: 5, 1: 5, 0: 6}
        for current, tier in expected.items():
            with self.subTest(current=current):
                self.assertEqual(calc_sanity_tier(20, TIER_COEFFICIENTS, current), tier)

    def test_exact_boundary_takes_stricter_tier(self):
        # 0.6 exactly is not greater than 0.6
        self.assertEqual(calc_sanity_tier(10, TIER_COEFFICIENTS, 6), 2)
        self.assertEqual(calc_sanity_tier(10, TIER_COEFFICIENTS, 8), 1)

    def test_monotonic(self):
        tiers = [calc_sanity_tier(37, TIER_COEFFICIENTS, cur) for cur in range(37, -1, -1)]
        self.assertEqual(tiers, sorted(tiers))

    def test_ability_scores_merge(self):
        scores = AbilityScores(charisma=4, intelligence=3, wisdom=3)
        merged = scores.merged({"wis": 8, "charisma": 1, "STR": 18})
        self.assertEqual(merged, AbilityScores(charisma=1, intelligence=3, wisdom=8))
        self.assertEqual(merged.capacity, 24)
        self.assertIs(scores.merged(None), scores)


class TestSanityTracker(unittest.TestCase):
    def setUp(self):
        self.tracker = SanityTracker(SanityConfig())
        self.events = []

        def receiver(sender, event, **kwargs):
            self.events.append(event)

        self.receiver = receiver
        self.tracker.tier_changed.connect(receiver, weak=False)
        self.char = Dummy()

    def test_uninitialized(self):
        self.assertIsNone(self.tracker.get_current(self.char))
        self.assertIsNone(self.tracker.get_record(self.char))
        self.assertIsNone(self.tracker.get_percent(self.char))
        self.assertEqual(self.tracker.get_tier(self.char), 0)
        self.assertEqual(self.tracker.get_capacity(self.char), 20)

    def test_initialize_idempotent(self):
        self.assertTrue(self.tracker.initialize(self.char))
        first = dict(self.char.attributes.data)
        self.tracker.set_current(self.char, 12)
        snapshot = dict(self.char.attributes.data)
        self.assertFalse(self.tracker.initialize(self.char))
        self.assertEqual(self.char.attributes.data, snapshot)
        self.assertEqual(first[("currSanity", SANITY_MODULE_ID)], 20)
        self.assertEqual(first[("insanityTier", SANITY_MODULE_ID)], 0)
        self.assertEqual(first[("totalSanity", SANITY_MODULE_ID)], 20)

    def test_scenario_tiers(self):
        self.tracker.initialize(self.char)
        self.assertEqual(self.tracker.get_tier(self.char), 0)
        self.tracker.set_current(self.char, 15)
        self.assertEqual(self.tracker.get_tier(self.char), 1)
        self.tracker.set_current(self.char, 9)
        self.assertEqual(self.tracker.get_tier(self.char), 2)
        self.assertEqual(
            [(e.previous_tier, e.new_tier) for e in self.events], [(0, 1), (1, 2)]
        )

    def test_set_current_clamps(self):
        self.assertEqual(self.tracker.set_current(self.char, 500), 20)
        self.assertEqual(self.tracker.get_current(self.char), 20)
        self.assertEqual(self.tracker.set_current(self.char, -7), 0)
        self.assertEqual(self.tracker.get_current(self.char), 0)

    def test_adjust_below_zero_fires_once(self):
        self.tracker.initialize(self.char)
        self.assertEqual(self.tracker.adjust_current(self.char, -100), 0)
        self.assertEqual(self.tracker.get_tier(self.char), 6)
        self.assertEqual(len(self.events), 1)
        event = self.events[0]
        self.assertIsInstance(event, TierChanged)
        self.assertIs(event.entity, self.char)
        self.assertEqual((event.previous_tier, event.new_tier), (0, 6))
        self.assertTrue(event.worsened)

    def test_adjust_initializes_missing_record(self):
        self.assertEqual(self.tracker.adjust_current(self.char, -5), 15)
        self.assertEqual(self.tracker.get_stored_tier(self.char), 1)

    def test_no_event_without_tier_change(self):
        self.tracker.initialize(self.char)
        self.tracker.set_current(self.char, 19)
        self.tracker.adjust_current(self.char, -1)
        self.assertEqual(self.events, [])

    def test_event_sent_after_write(self):
        seen = []

        def check(sender, event, **kwargs):
            seen.append(
                (
                    sender.get_current(event.entity),
                    sender.get_stored_tier(event.entity),
                )
            )

        self.tracker.tier_changed.connect(check, weak=False)
        self.tracker.set_current(self.char, 2)
        self.assertEqual(seen, [(2, 5)])

    def test_get_tier_is_pure(self):
        self.tracker.set_current(self.char, 7)
        writes = self.char.attributes.writes
        self.assertEqual(self.tracker.get_tier(self.char), self.tracker.get_tier(self.char))
        self.assertEqual(self.char.attributes.writes, writes)

    def test_stored_value_out_of_range_clamped_on_read(self):
        self.tracker.initialize(self.char)
        self.char.attributes.add("currSanity", 50, category=SANITY_MODULE_ID)
        self.assertEqual(self.tracker.get_current(self.char), 20)
        self.char.attributes.add("currSanity", -4, category=SANITY_MODULE_ID)
        self.assertEqual(self.tracker.get_current(self.char), 0)

    def test_capacity_preview(self):
        self.assertEqual(self.tracker.get_capacity(self.char, {"INT": 13}), 40)
        self.assertEqual(self.tracker.get_capacity(self.char), 20)

    def test_abilities_drop_shrinks_current(self):
        self.tracker.initialize(self.char)
        current = self.tracker.on_abilities_changed(self.char, {"CHA": 0, "INT": 2})
        # new capacity (0 + 2 + 3) * 2
        self.assertEqual(current, 10)
        self.assertEqual(
            self.char.attributes.get("totalSanity", category=SANITY_MODULE_ID), 10
        )
        self.assertEqual(self.events, [])

    def test_abilities_rise_keeps_current(self):
        self.tracker.initialize(self.char)
        current = self.tracker.on_abilities_changed(self.char, {"wisdom": 8})
        self.assertEqual(current, 20)
        # 20 / 30 before the new wisdom is committed
        self.char.traits.scores["WIS"] = 8
        self.assertEqual(self.tracker.get_tier(self.char), 1)
        self.assertEqual([(e.previous_tier, e.new_tier) for e in self.events], [(0, 1)])

    def test_abilities_change_initializes_with_pending(self):
        self.tracker.on_abilities_changed(self.char, {"CHA": 6})
        self.assertEqual(
            self.char.attributes.get("currSanity", category=SANITY_MODULE_ID), 24
        )
        self.assertEqual(self.events, [])

    def test_inactive_capacity(self):
        char = Dummy(0, 0, 0)
        self.tracker.initialize(char)
        self.assertFalse(self.tracker.is_active(char))
        self.assertEqual(self.tracker.set_current(char, 10), 0)
        self.assertEqual(self.tracker.get_tier(char), 0)
        self.assertIsNone(self.tracker.get_percent(char))
        self.assertEqual(self.events, [])

    def test_missing_traits_read_as_zero(self):
        char = NoTraits()
        self.assertEqual(self.tracker.get_capacity(char), 0)
        self.assertTrue(self.tracker.initialize(char))
        self.assertEqual(self.tracker.get_current(char), 0)

    def test_percent_rounds_up(self):
        self.tracker.set_current(self.char, 3)
        self.assertEqual(self.tracker.get_percent(self.char), 15)
        char = Dummy(1, 1, 1)
        self.tracker.set_current(char, 1)
        self.assertEqual(self.tracker.get_percent(char), 17)

    def test_record(self):
        self.tracker.set_current(self.char, 9)
        record = self.tracker.get_record(self.char)
        self.assertEqual((record.capacity, record.current, record.tier), (20, 9, 2))

    def test_stored_tier_kept_within_config(self):
        self.tracker.initialize(self.char)
        self.char.attributes.add("insanityTier", 9, category=SANITY_MODULE_ID)
        self.assertEqual(self.tracker.get_stored_tier(self.char), 6)
        self.char.attributes.add("insanityTier", -2, category=SANITY_MODULE_ID)
        self.assertEqual(self.tracker.get_stored_tier(self.char), 0)

        tracker = SanityTracker(SanityConfig(tier_coefficients=(0.5, 0.0)))
        self.char.attributes.add("insanityTier", 5, category=SANITY_MODULE_ID)
        self.assertEqual(tracker.get_stored_tier(self.char), 2)

    def test_custom_config(self):
        config = SanityConfig(module_id="other", tier_coefficients=(0.5, 0.0))
        tracker = SanityTracker(config)
        tracker.set_current(self.char, 10)
        self.assertEqual(tracker.get_tier(self.char), 1)
        self.assertEqual(config.max_tier, 2)
        self.assertEqual(self.char.attributes.get("currSanity", category="other"), 10)
        self.assertIsNone(self.tracker.get_current(self.char))

    def test_listener_errors_propagate(self):
        def broken(sender, event, **kwargs):
            raise RuntimeError("listener failed")

        self.tracker.tier_changed.connect(broken, weak=False)
        with self.assertRaises(RuntimeError):
            self.tracker.set_current(self.char, 0)

    def test_persistence_errors_propagate(self):
        self.char.attributes = FailingAttributes()
        with self.assertRaises(IOError):
            self.tracker.initialize(self.char)


class TestSanityConfig(unittest.TestCase):
    def test_from_settings_defaults(self):
        config = SanityConfig.from_settings(object())
        self.assertEqual(config.tier_coefficients, TIER_COEFFICIENTS)
        self.assertTrue(config.show_meter)
        self.assertFalse(config.public_notifications)
        self.assertFalse(config.debug)
        self.assertEqual(config.max_tier, 6)

    def test_from_settings_values(self):
        class Settings:
            SANITY_SHOW_METER = False
            SANITY_PUBLIC_NOTIFICATIONS = True
            SANITY_DEBUG = True
            SANITY_TIER_COEFFICIENTS = [0.5, 0.25]

        config = SanityConfig.from_settings(Settings)
        self.assertFalse(config.show_meter)
        self.assertTrue(config.public_notifications)
        self.assertTrue(config.debug)
        self.assertEqual(config.tier_coefficients, (0.5, 0.25))


if __name__ == "__main__":
    unittest.main()
