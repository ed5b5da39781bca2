"""Tests for the set editing session."""

import pytest

from cardcatalog.domain.editor import SetEditor
from cardcatalog.domain.entities import CardField, EXPECTED_HEADERS, YesNo
from cardcatalog.domain.errors import SchemaMismatchError, ValidationError
from cardcatalog.domain.sort_filter import SortDirection


@pytest.fixture
def editor(bridge, timer_factory):
    """Unnamed editing session with manual timers."""
    return SetEditor(bridge, timer_factory=timer_factory)


@pytest.fixture
def named_editor(editor, sample_records, write_checklist):
    """Session with the sample checklist imported and named."""
    editor.import_csv(str(write_checklist(sample_records)))
    editor.name_set(1987, "Topps", "Base Set")
    return editor


class TestImport:
    """Tests for importing into a session."""

    def test_import_replaces_rows(self, editor, sample_records, write_checklist):
        count = editor.import_csv(str(write_checklist(sample_records)))

        assert count == 4
        assert len(editor.store) == 4

    def test_schema_mismatch_leaves_rows(self, editor, sample_records, write_checklist):
        editor.import_csv(str(write_checklist(sample_records)))
        headers = [h for h in EXPECTED_HEADERS if h != "Grade"]
        bad = write_checklist(sample_records[:1], headers=headers, name="bad.csv")

        with pytest.raises(SchemaMismatchError):
            editor.import_csv(str(bad))

        assert len(editor.store) == 4

    def test_unnamed_session_does_not_save(self, editor, bridge, sample_records, write_checklist):
        editor.import_csv(str(write_checklist(sample_records)))
        editor.autosave.flush()

        assert bridge.load_index() == []
        assert editor.save() is None


class TestNameSet:
    """Tests for naming a session."""

    def test_saves_immediately(self, named_editor, bridge):
        assert named_editor.slug == "1987-topps-base-set"
        assert named_editor.title == "1987 Topps - Base Set"

        [entry] = bridge.load_index()
        assert entry.slug == "1987-topps-base-set"
        assert entry.row_count == 4
        assert entry.owned_count == 2
        assert len(bridge.load_set("1987-topps-base-set").rows) == 4
        assert not named_editor.autosave.pending

    def test_slug_made_unique(self, named_editor, bridge, timer_factory):
        other = SetEditor(bridge, timer_factory=timer_factory)
        other.import_text(",".join(EXPECTED_HEADERS) + "\n")

        slug = other.name_set(1987, "Topps", "Base Set")

        assert slug == "1987-topps-base-set-2"
        assert {e.slug for e in bridge.load_index()} == {
            "1987-topps-base-set",
            "1987-topps-base-set-2",
        }

    def test_renaming_keeps_slug(self, named_editor, bridge):
        named_editor.name_set(1987, "Topps", "Traded")

        assert named_editor.slug == "1987-topps-base-set"
        assert bridge.load_set("1987-topps-base-set").title == "1987 Topps - Traded"

    @pytest.mark.parametrize(
        "brand, description",
        [("", "Base Set"), ("Topps", ""), ("Topps", "   "), ("Topps", "x" * 61)],
    )
    def test_validation(self, editor, brand, description):
        with pytest.raises(ValidationError):
            editor.name_set(1987, brand, description)
        assert editor.slug is None


class TestAutosave:
    """Tests for debounced saving while editing."""

    def test_edits_coalesce_into_one_save(self, named_editor, bridge, timer_factory):
        before = len(timer_factory.timers)

        named_editor.update_cell(2, CardField.OWNED, "Yes")
        named_editor.update_cell(3, CardField.OWNED, "Yes")
        named_editor.update_cell(3, CardField.COST, "7")
        named_editor.finalize_currency_edit(3, CardField.COST)

        assert bridge.load_index()[0].owned_count == 2
        assert len(timer_factory.timers) - before == 4

        timer_factory.last.fire()

        entry = bridge.load_index()[0]
        assert entry.owned_count == 4
        assert entry.owned_pct == 100.0
        assert bridge.load_set(named_editor.slug).rows[3].cost == "$7.00"

    def test_close_flushes(self, named_editor, bridge):
        named_editor.update_cell(0, CardField.PURCHASED_FROM, "eBay")
        named_editor.close()

        assert bridge.load_set(named_editor.slug).rows[0].purchased_from == "eBay"

    def test_read_only_edit_schedules_nothing(self, named_editor, timer_factory):
        before = len(timer_factory.timers)
        named_editor.update_cell(0, CardField.DESCRIPTION, "Changed")
        assert len(timer_factory.timers) == before


class TestOpen:
    """Tests for reopening saved sets."""

    def test_open_saved(self, named_editor, bridge, timer_factory):
        reopened = SetEditor.open(bridge, "1987-topps-base-set", timer_factory=timer_factory)

        assert reopened.is_named
        assert reopened.year == 1987
        assert reopened.brand == "Topps"
        assert reopened.store.rows == named_editor.store.rows

    def test_open_unknown_is_empty(self, bridge, timer_factory):
        editor = SetEditor.open(bridge, "missing", timer_factory=timer_factory)

        assert editor.slug == "missing"
        assert len(editor.store) == 0
        assert not editor.is_named


class TestView:
    """Tests for the editor's view state."""

    def test_click_sort_and_needed_only(self, named_editor):
        named_editor.needed_only = True
        spec = named_editor.click_sort(CardField.TARGET_PRICE)

        assert spec.direction is SortDirection.DESC
        view = named_editor.view()
        assert [v.original_index for v in view] == [2, 3]
        assert all(v.row.owned != YesNo.YES for v in view)

        assert named_editor.click_sort(CardField.TARGET_PRICE).direction is SortDirection.ASC


class TestExport:
    """Tests for exporting a session."""

    def test_export_named_after_title(self, named_editor, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        path = named_editor.export_csv()

        assert path.name == "1987 Topps - Base Set.csv"
        assert path.read_text(encoding="utf-8").splitlines()[0] == ",".join(EXPECTED_HEADERS)

    def test_export_empty_rejected(self, editor, tmp_path):
        with pytest.raises(ValidationError, match="No data to export"):
            editor.export_csv(str(tmp_path / "x.csv"))
