"""Tests for session composition."""

import random
from collections import Counter

import pytest

from circuit_crew.services.composer import SessionDraft, build_smart_session


class TestBuildSmartSession:
    """Tests for build_smart_session."""

    def test_empty_library(self):
        assert build_smart_session([], 25, random.Random(1)) == []

    @pytest.mark.parametrize("target", [9, 12, 15, 18, 20, 21])
    def test_reachable_targets_are_exact(self, target, sample_library):
        """Test each pick repeats two or three times and the total hits the target."""
        slots = build_smart_session(sample_library, target, random.Random(target))
        counts = Counter(slot.exercise.id for slot in slots)

        assert len(slots) == target
        assert len(counts) == max(round(target / 3), 3)
        assert all(2 <= n <= 3 for n in counts.values())

    def test_default_target_uses_eight_exercises(self, sample_library):
        """Test 25 slots ask for eight exercises, each capped at three repeats."""
        slots = build_smart_session(sample_library, rng=random.Random(4))
        counts = Counter(slot.exercise.id for slot in slots)

        assert len(counts) == 8
        assert set(counts.values()) == {3}
        assert len(slots) == 24

    def test_small_library_caps_unique_count(self, sample_library):
        slots = build_smart_session(sample_library[:2], 25, random.Random(1))
        counts = Counter(slot.exercise.id for slot in slots)

        assert len(counts) == 2
        assert 4 <= len(slots) <= 6

    def test_slot_ids_unique(self, sample_library):
        slots = build_smart_session(sample_library, 21, random.Random(8))
        assert len({s.slot_id for s in slots}) == len(slots)

    def test_seed_fixes_everything(self, sample_library):
        """Test the same seed gives the same exercises, order and slot ids."""
        first = build_smart_session(sample_library, 21, random.Random(42))
        second = build_smart_session(sample_library, 21, random.Random(42))
        assert first == second


class TestSessionDraft:
    """Tests for the editable slot list."""

    def test_add_and_remove(self, sample_library):
        draft = SessionDraft(random.Random(1))
        draft.add(sample_library[0])
        slots = draft.add(sample_library[0])

        assert len(slots) == 2
        assert slots[0].slot_id != slots[1].slot_id

        remaining = draft.remove(slots[0].slot_id)
        assert remaining == (slots[1],)

    def test_snapshots_are_immutable(self, sample_library):
        draft = SessionDraft(random.Random(1))
        before = draft.add(sample_library[0])
        after = draft.add(sample_library[1])

        assert len(before) == 1
        assert len(after) == 2

    def test_add_all_and_clear(self, sample_library):
        draft = SessionDraft(random.Random(1))
        assert len(draft.add_all(sample_library)) == len(sample_library)
        assert draft.exercises == list(sample_library)
        assert draft.clear() == ()
        assert len(draft) == 0

    def test_remove_exercise_drops_every_slot(self, sample_library):
        draft = SessionDraft(random.Random(1))
        draft.smart_fill(sample_library, 12)
        target = draft.slots[0].exercise.id

        slots = draft.remove_exercise(target)
        assert all(s.exercise.id != target for s in slots)

    def test_shuffle_keeps_slots(self, sample_library):
        draft = SessionDraft(random.Random(1))
        original = draft.smart_fill(sample_library, 15)
        shuffled = draft.shuffle()
        assert sorted(s.slot_id for s in shuffled) == sorted(s.slot_id for s in original)

    def test_reorder(self, sample_library):
        draft = SessionDraft(random.Random(1))
        slots = draft.add_all(sample_library[:3])
        ids = [s.slot_id for s in reversed(slots)]

        assert [s.slot_id for s in draft.reorder(ids)] == ids

    def test_reorder_rejects_partial_list(self, sample_library):
        draft = SessionDraft(random.Random(1))
        slots = draft.add_all(sample_library[:3])

        with pytest.raises(ValueError):
            draft.reorder([slots[0].slot_id])
