"""
Tests for qz.model.bank.WordBank.
"""
import pytest

from qz.model.entries import Entry
from qz.model.errors import BankIOError, ParseError
from qz.model.layout import LayoutMode

from conftest import align_meaning_with, check_pair_symmetry, word_named, write_bank


def _working_entries(bank):
    return {Entry(w.text, w.meaning.text) for w in bank.words}


def test_fill_draws_initial_group(make_bank, vocabulary):
    bank = make_bank(group_size=4)
    bank.fill(vocabulary)
    assert len(bank.words) == len(bank.meanings) == 4
    assert bank.reserve_size == 6
    assert not bank.finished


def test_fill_with_no_entries_keeps_previous_state(make_bank, vocabulary):
    bank = make_bank(group_size=4)
    bank.fill(vocabulary)
    before = _working_entries(bank)
    with pytest.raises(ParseError):
        bank.fill([])
    assert _working_entries(bank) == before
    assert bank.reserve_size == 6


def test_failed_file_load_keeps_previous_state(make_bank, vocabulary, tmp_path):
    bank = make_bank(group_size=4)
    bank.fill(vocabulary)
    before = _working_entries(bank)

    with pytest.raises(BankIOError):
        bank.fill_from_file(str(tmp_path / "missing.tsv"))
    bad = write_bank(tmp_path / "bad.tsv", ["cat\tfeline", "single field"])
    with pytest.raises(ParseError):
        bank.fill_from_file(bad, strict=True)

    assert _working_entries(bank) == before
    assert bank.reserve_size == 6


def test_malformed_line_is_skipped_on_lenient_load(make_bank, tmp_path):
    bank = make_bank(group_size=5)
    path = write_bank(tmp_path / "bank.tsv", ["cat\tfeline", "single field", "dog\tcanine"])
    bank.fill_from_file(path)
    assert _working_entries(bank) == {Entry("cat", "feline"), Entry("dog", "canine")}


def test_fill_then_save_round_trips(make_bank, vocabulary):
    bank = make_bank(group_size=3)
    bank.fill(vocabulary)
    assert sorted(bank.entries_to_save(), key=lambda e: e.word) == vocabulary


def test_dump_writes_unsolved_pairs(make_bank, animals, tmp_path):
    bank = make_bank(group_size=2)
    bank.fill(animals)
    align_meaning_with(word_named(bank, "cat").meaning, word_named(bank, "cat"))

    path = str(tmp_path / "out.tsv")
    bank.dump(path)
    with open(path, encoding="utf-8") as f:
        assert f.read() == "dog\tcanine\n"


class TestDrawGroup:
    def test_draw_moves_entries_from_reserve(self, make_bank, vocabulary):
        bank = make_bank(group_size=3)
        bank.fill(vocabulary)
        assert bank.draw_group(4) == 4
        assert len(bank.words) == 7
        assert bank.reserve_size == 3

    def test_draw_more_than_reserve(self, make_bank, vocabulary):
        bank = make_bank(group_size=3)
        bank.fill(vocabulary)
        assert bank.draw_group(50) == 7
        assert len(bank.words) == len(bank.meanings) == 10
        assert bank.reserve_size == 0

    def test_every_entry_is_drawn_exactly_once(self, make_bank, vocabulary):
        bank = make_bank(group_size=10)
        bank.fill(vocabulary)
        assert sorted(_working_entries(bank), key=lambda e: e.word) == vocabulary


class TestResize:
    def test_add_one_grows_group(self, make_bank, vocabulary):
        bank = make_bank(group_size=3)
        bank.fill(vocabulary)
        assert bank.add_one()
        assert len(bank.words) == 4
        assert bank.group_size == 4

    def test_add_one_with_empty_reserve(self, make_bank, animals):
        bank = make_bank(group_size=2)
        bank.fill(animals)
        assert not bank.add_one()
        assert bank.group_size == 2

    def test_remove_last_returns_entry(self, make_bank, vocabulary):
        bank = make_bank(group_size=3)
        bank.fill(vocabulary)
        last = bank.words[-1]
        assert bank.remove_last()
        assert len(bank.words) == len(bank.meanings) == 2
        assert bank.group_size == 2
        assert bank.reserve[-1] == Entry(last.text, last.meaning.text)
        assert last.meaning not in bank.duplicates

    def test_remove_last_drops_solved_entry(self, make_bank, vocabulary):
        bank = make_bank(group_size=3)
        bank.fill(vocabulary)
        last = bank.words[-1]
        align_meaning_with(last.meaning, last)
        bank.check()
        assert last.correct

        assert bank.remove_last()
        assert bank.reserve_size == 7
        assert not last.correct and not last.meaning.correct

    def test_remove_last_keeps_one_word(self, make_bank, animals):
        bank = make_bank(group_size=1)
        bank.fill(animals)
        assert not bank.remove_last()
        assert len(bank.words) == 1

    def test_remove_then_add_restores_size(self, make_bank, vocabulary):
        bank = make_bank(group_size=5)
        bank.fill(vocabulary)
        bank.remove_last()
        bank.add_one()
        assert len(bank.words) == 5
        assert bank.reserve_size == 5

    def test_remove_last_follows_draw_order_not_layout(self, make_bank, vocabulary):
        bank = make_bank(group_size=4)
        bank.fill(vocabulary)
        bank.word_mode = LayoutMode.ORDERED
        bank.relayout()
        newest = bank.words[-1]
        bank.remove_last()
        assert newest not in bank.words


class TestCheck:
    def test_nothing_moved_means_nothing_correct(self, make_bank, vocabulary):
        bank = make_bank(group_size=4)
        bank.fill(vocabulary)
        assert bank.check() == 4
        assert bank.correct == 0
        assert bank.remaining == 10

    def test_cat_and_dog(self, make_bank, animals):
        bank = make_bank(group_size=2)
        bank.fill(animals)
        assert len(bank.words) == len(bank.meanings) == 2
        cat, dog = word_named(bank, "cat"), word_named(bank, "dog")

        align_meaning_with(cat.meaning, cat)
        assert bank.check() == 1
        assert bank.correct == 1
        assert bank.remaining == 1
        assert cat.pair is cat.meaning and cat.meaning.pair is cat

        align_meaning_with(dog.meaning, dog)
        assert bank.check() == 0
        assert bank.remaining == 0

        assert bank.advance_group()
        assert bank.finished
        assert bank.words == [] and bank.meanings == []

    def test_meaning_may_sit_a_little_above_its_word(self, make_bank, animals):
        bank = make_bank(group_size=2)
        bank.fill(animals)
        cat = word_named(bank, "cat")
        # 36 px lines: the band reaches 22.5 px above the word and 13.5 px below
        cat.meaning.move_by(200, cat.rect.y - cat.meaning.rect.y - 20)
        assert bank.check() == 1
        assert cat.correct

        cat.meaning.move_by(0, 40)
        assert bank.check() == 2
        assert not cat.correct

    def test_wrong_meaning_does_not_count(self, make_bank, animals):
        bank = make_bank(group_size=2)
        bank.fill(animals)
        cat, dog = word_named(bank, "cat"), word_named(bank, "dog")
        align_meaning_with(dog.meaning, cat)
        assert bank.check() == 2

    def test_duplicate_meanings(self, make_bank):
        bank = make_bank(group_size=2)
        bank.fill([Entry("quick", "fast"), Entry("rapid", "fast")])
        quick, rapid = word_named(bank, "quick"), word_named(bank, "rapid")

        # Drag the "fast" tile that was drawn for rapid onto quick, and leave
        # quick's own tile sitting, unmoved, on rapid's row.
        align_meaning_with(rapid.meaning, quick)
        quick.meaning.rect.y = rapid.rect.y
        assert not quick.meaning.moved

        assert bank.check() == 1
        assert quick.correct
        assert quick.pair is rapid.meaning
        assert not rapid.correct
        check_pair_symmetry(bank.words + bank.meanings)

        align_meaning_with(quick.meaning, rapid)
        assert bank.check() == 0

    def test_meaning_moved_to_another_word_is_released(self, make_bank):
        bank = make_bank(group_size=2)
        bank.fill([Entry("quick", "fast"), Entry("rapid", "fast")])
        quick, rapid = word_named(bank, "quick"), word_named(bank, "rapid")
        tile = quick.meaning
        align_meaning_with(tile, quick)
        bank.check()
        assert quick.pair is tile

        align_meaning_with(tile, rapid)
        bank.check()
        assert rapid.pair is tile
        assert not quick.correct

    def test_change_callback_fires(self, make_bank, animals):
        calls = []
        bank = make_bank(group_size=2, on_change=lambda: calls.append(1))
        bank.fill(animals)
        count = len(calls)
        bank.check()
        assert len(calls) == count + 1


class TestAdvance:
    def test_incomplete_group_stays(self, make_bank, vocabulary):
        bank = make_bank(group_size=3)
        bank.fill(vocabulary)
        words = list(bank.words)
        assert not bank.advance_group()
        assert bank.words == words

    def test_complete_group_draws_next(self, make_bank, vocabulary):
        bank = make_bank(group_size=3)
        bank.fill(vocabulary)
        for word in bank.words:
            align_meaning_with(word.meaning, word)
        assert bank.advance_group()
        assert len(bank.words) == 3
        assert bank.reserve_size == 4
        assert all(not m.moved for m in bank.meanings)

    def test_last_group_may_be_short(self, make_bank, vocabulary):
        bank = make_bank(group_size=4)
        bank.fill(vocabulary)
        for _ in range(2):
            for word in bank.words:
                align_meaning_with(word.meaning, word)
            assert bank.advance_group()
        assert len(bank.words) == 2
        assert bank.reserve_size == 0


def test_align_keeps_rows(make_bank, vocabulary):
    bank = make_bank(group_size=5)
    bank.fill(vocabulary)
    rows = [m.text for m in sorted(bank.meanings, key=lambda m: m.rect.y)]
    bank.layout.adjust_point_size(-2)
    bank.align()
    assert [m.text for m in sorted(bank.meanings, key=lambda m: m.rect.y)] == rows
    assert sorted(m.rect.y for m in bank.meanings) == [5 + 30 * i for i in range(5)]
