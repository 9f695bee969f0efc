"""Unit tests for cleaners/ — ActionCleaner and SubjectCleaner."""
from __future__ import annotations

import pytest

from cani.cleaners.action_cleaner import ActionCleaner
from cani.cleaners.base import WILDCARD_PATTERN, squash
from cani.cleaners.subject_cleaner import SubjectCleaner, pluralize, singularize
from cani.config import AliasConfig
from cani.errors import InvalidActionError, InvalidSubjectError


class InvoiceViewModel:
    pass


class Invoice:
    pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestSquash:
    def test_lowercases_and_drops_separators(self) -> None:
        assert squash("  Purchase_Order-Line item ") == "purchaseorderlineitem"

    def test_keeps_regex_characters(self) -> None:
        assert squash("invoice|bill") == "invoice|bill"


class TestInflection:
    @pytest.mark.parametrize(
        ("plural", "singular"),
        [
            ("invoices", "invoice"),
            ("categories", "category"),
            ("addresses", "address"),
            ("boxes", "box"),
            ("batches", "batch"),
            ("status", "status"),
            ("address", "address"),
            ("bus", "bus"),
        ],
    )
    def test_singularize(self, plural: str, singular: str) -> None:
        assert singularize(plural) == singular

    @pytest.mark.parametrize(
        ("singular", "plural"),
        [
            ("invoice", "invoices"),
            ("category", "categories"),
            ("day", "days"),
            ("box", "boxes"),
            ("batch", "batches"),
            ("address", "addresses"),
        ],
    )
    def test_pluralize(self, singular: str, plural: str) -> None:
        assert pluralize(singular) == plural


# ---------------------------------------------------------------------------
# ActionCleaner
# ---------------------------------------------------------------------------


class TestActionCleanerClean:
    def test_lowercases(self) -> None:
        assert ActionCleaner().clean("EDIT") == "edit"

    def test_synonym_folds_to_canonical(self) -> None:
        cleaner = ActionCleaner()
        assert cleaner.clean("update") == "edit"
        assert cleaner.clean("Remove") == "delete"
        assert cleaner.clean("show") == "view"

    def test_unknown_action_passes_through(self) -> None:
        assert ActionCleaner().clean("Mark_Paid") == "markpaid"

    @pytest.mark.parametrize("raw", ["manage", "Manage", "all", "*", ".*"])
    def test_wildcards(self, raw: str) -> None:
        assert ActionCleaner().clean(raw) == WILDCARD_PATTERN

    @pytest.mark.parametrize("raw", ["Edit", "update", "manage", "approve", "Show"])
    def test_idempotent(self, raw: str) -> None:
        cleaner = ActionCleaner()
        once = cleaner.clean(raw)
        assert cleaner.clean(once) == once

    def test_none_raises(self) -> None:
        with pytest.raises(InvalidActionError):
            ActionCleaner().clean(None)

    def test_canonical_wins_over_synonym_listing(self) -> None:
        cleaner = ActionCleaner({"view": ["show"], "show": ["display"]})
        assert cleaner.clean("display") == "show"
        assert cleaner.clean("show") == "show"


class TestActionCleanerAliases:
    def test_aliases_include_synonyms(self) -> None:
        aliases = ActionCleaner().aliases_for("delete")
        assert {"delete", "remove", "destroy", "erase"} <= aliases

    def test_unknown_action_aliases_itself(self) -> None:
        assert ActionCleaner().aliases_for("archive") == frozenset({"archive"})

    def test_wildcard_aliases(self) -> None:
        assert ActionCleaner().aliases_for(WILDCARD_PATTERN) == frozenset({".*"})

    def test_custom_table_replaces_defaults(self) -> None:
        cleaner = ActionCleaner({"approve": ["sign"]})
        assert cleaner.clean("update") == "update"
        assert cleaner.aliases_for("approve") == frozenset({"approve", "sign"})
        assert cleaner.canonical_actions == ["approve"]

    def test_from_config_merges_defaults(self) -> None:
        cleaner = ActionCleaner.from_config(AliasConfig(actions={"approve": ["sign"]}))
        assert cleaner.clean("sign") == "approve"
        assert cleaner.clean("modify") == "edit"

    def test_from_config_can_replace_defaults(self) -> None:
        config = AliasConfig(actions={"approve": ["sign"]}, replace_defaults=True)
        cleaner = ActionCleaner.from_config(config)
        assert cleaner.clean("modify") == "modify"


# ---------------------------------------------------------------------------
# SubjectCleaner
# ---------------------------------------------------------------------------


class TestSubjectCleanerClean:
    def test_string_subject(self) -> None:
        assert SubjectCleaner().clean("Invoices") == "invoice"

    def test_instance_uses_class_name(self) -> None:
        assert SubjectCleaner().clean(Invoice()) == "invoice"

    def test_class_uses_its_name(self) -> None:
        assert SubjectCleaner().clean(Invoice) == "invoice"

    def test_strips_type_suffixes(self) -> None:
        cleaner = SubjectCleaner()
        assert cleaner.clean(InvoiceViewModel()) == "invoice"
        assert cleaner.clean("InvoicesController") == "invoice"
        assert cleaner.clean("InvoiceCommands") == "invoice"

    def test_suffix_alone_is_kept(self) -> None:
        assert SubjectCleaner().clean("Model") == "model"

    def test_suffix_inside_a_word_is_kept(self) -> None:
        cleaner = SubjectCleaner()
        assert cleaner.clean("remodel") == "remodel"
        assert cleaner.clean("Remodels") == "remodel"
        assert cleaner.clean("invoicecontroller") == "invoicecontroller"

    @pytest.mark.parametrize(
        "raw", ["InvoiceDto", "invoice_dto", "Invoice-Controller", "InvoiceDTO", "InvoiceModels"]
    )
    def test_suffix_stripped_at_word_boundary(self, raw: str) -> None:
        assert SubjectCleaner().clean(raw) == "invoice"

    def test_acronym_boundary(self) -> None:
        assert SubjectCleaner().clean("PDFModel") == "pdf"

    def test_separators_dropped(self) -> None:
        assert SubjectCleaner().clean("purchase_orders") == "purchaseorder"

    @pytest.mark.parametrize("raw", ["all", "ALL", "*", ".*"])
    def test_wildcards(self, raw: str) -> None:
        assert SubjectCleaner().clean(raw) == WILDCARD_PATTERN

    @pytest.mark.parametrize(
        "raw",
        ["Invoices", "InvoiceCommands", "XModelViewModel", "categories", "bills", "statuses"],
    )
    def test_idempotent(self, raw: str) -> None:
        cleaner = SubjectCleaner(aliases={"invoice": ["bill"]})
        once = cleaner.clean(raw)
        assert cleaner.clean(once) == once

    def test_synonym_folds_to_canonical(self) -> None:
        cleaner = SubjectCleaner(aliases={"invoice": ["bill"]})
        assert cleaner.clean("Bills") == "invoice"

    def test_custom_suffixes(self) -> None:
        cleaner = SubjectCleaner(suffixes=["resource"])
        assert cleaner.clean("InvoiceResource") == "invoice"
        assert cleaner.clean("InvoiceController") == "invoicecontroller"

    def test_none_raises(self) -> None:
        with pytest.raises(InvalidSubjectError):
            SubjectCleaner().clean(None)


class TestSubjectCleanerAliases:
    def test_name_and_plural(self) -> None:
        assert SubjectCleaner().aliases_for("invoice") == frozenset({"invoice", "invoices"})

    def test_synonyms_and_their_plurals(self) -> None:
        cleaner = SubjectCleaner(aliases={"invoice": ["bill"]})
        assert cleaner.aliases_for("invoice") == frozenset(
            {"invoice", "invoices", "bill", "bills"}
        )

    def test_wildcard_aliases(self) -> None:
        assert SubjectCleaner().aliases_for(WILDCARD_PATTERN) == frozenset({".*"})

    def test_never_empty(self) -> None:
        assert SubjectCleaner().aliases_for("x")

    def test_from_config(self) -> None:
        config = AliasConfig(subjects={"Invoices": ["Bill"]}, subject_suffixes=["dto"])
        cleaner = SubjectCleaner.from_config(config)
        assert cleaner.clean("BillDto") == "invoice"
