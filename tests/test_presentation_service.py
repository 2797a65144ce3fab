"""Tests for PresentationService: validation and slide ordering rules."""

from __future__ import annotations

import asyncio
import gc

import pytest

from slideclaw.services import (
    PresentationNotFoundError,
    PresentationService,
    SlideNotFoundError,
    ValidationError,
)

HTML = "<html><head></head><body><h1>Slide</h1></body></html>"


def _orders(presentation) -> list[int]:
    return sorted(s.order for s in presentation.slides)


async def _deck(service: PresentationService, count: int):
    presentation = await service.create_presentation("Deck")
    for i in range(count):
        await service.add_slide(presentation.id, f"Slide {i}", HTML)
    return await service.get_presentation(presentation.id)


class TestCreatePresentation:
    async def test_title_only_gives_empty_deck(self, presentation_service):
        presentation = await presentation_service.create_presentation("Quarterly review")
        assert presentation.title == "Quarterly review"
        assert presentation.description is None
        assert presentation.slides == []
        assert presentation.created_at == presentation.updated_at

    @pytest.mark.parametrize("title", ["", "   ", None])
    async def test_blank_title_rejected(self, presentation_service, title):
        with pytest.raises(ValidationError):
            await presentation_service.create_presentation(title)

    async def test_ids_are_unique(self, presentation_service):
        a = await presentation_service.create_presentation("A")
        b = await presentation_service.create_presentation("B")
        assert a.id != b.id

    async def test_list_in_creation_order(self, presentation_service):
        for title in ("A", "B", "C"):
            await presentation_service.create_presentation(title)
        result = await presentation_service.list_presentations()
        assert [p.title for p in result.presentations] == ["A", "B", "C"]


class TestDeletePresentation:
    async def test_delete_is_permanent(self, presentation_service):
        presentation = await presentation_service.create_presentation("Deck")
        await presentation_service.delete_presentation(presentation.id)
        with pytest.raises(PresentationNotFoundError):
            await presentation_service.get_presentation(presentation.id)

    async def test_delete_unknown_raises(self, presentation_service):
        with pytest.raises(PresentationNotFoundError):
            await presentation_service.delete_presentation("missing")

    async def test_lock_entries_released(self, presentation_service):
        for i in range(50):
            try:
                await presentation_service.delete_presentation(f"missing-{i}")
            except PresentationNotFoundError:
                pass
        try:
            await presentation_service.add_slide("missing", "One", HTML)
        except PresentationNotFoundError:
            pass
        presentation = await _deck(presentation_service, 1)
        await presentation_service.delete_presentation(presentation.id)

        gc.collect()
        assert len(presentation_service._locks) == 0


class TestAddSlide:
    async def test_appends_with_next_order(self, presentation_service):
        presentation = await _deck(presentation_service, 2)
        slide = await presentation_service.add_slide(presentation.id, "Third", HTML, "notes")

        assert slide.order == 2
        assert slide.notes == "notes"
        stored = await presentation_service.get_presentation(presentation.id)
        assert _orders(stored) == [0, 1, 2]

    async def test_bumps_presentation_updated_at(self, presentation_service):
        presentation = await presentation_service.create_presentation("Deck")
        await presentation_service.add_slide(presentation.id, "One", HTML)
        stored = await presentation_service.get_presentation(presentation.id)
        assert stored.updated_at > presentation.updated_at

    async def test_unknown_presentation(self, presentation_service):
        with pytest.raises(PresentationNotFoundError):
            await presentation_service.add_slide("missing", "One", HTML)

    @pytest.mark.parametrize("title,html", [("", HTML), ("One", ""), (None, HTML), ("One", None)])
    async def test_title_and_html_required(self, presentation_service, title, html):
        presentation = await presentation_service.create_presentation("Deck")
        with pytest.raises(ValidationError):
            await presentation_service.add_slide(presentation.id, title, html)


class TestUpdateSlide:
    async def test_only_supplied_fields_change(self, presentation_service):
        presentation = await _deck(presentation_service, 1)
        original = presentation.slides[0]

        updated = await presentation_service.update_slide(
            presentation.id, original.id, notes="Speak slowly"
        )

        assert updated.title == original.title
        assert updated.html == original.html
        assert updated.notes == "Speak slowly"
        assert updated.order == original.order
        assert updated.updated_at > original.updated_at

        stored = await presentation_service.get_presentation(presentation.id)
        assert stored.updated_at == updated.updated_at
        assert stored.slides[0].notes == "Speak slowly"

    async def test_unknown_slide(self, presentation_service):
        presentation = await _deck(presentation_service, 1)
        with pytest.raises(SlideNotFoundError):
            await presentation_service.update_slide(presentation.id, "nope", title="x")

    async def test_unknown_presentation(self, presentation_service):
        with pytest.raises(PresentationNotFoundError):
            await presentation_service.update_slide("missing", "nope", title="x")

    @pytest.mark.parametrize("field", ["title", "html", "notes"])
    async def test_wrong_type_rejected_and_not_saved(self, presentation_service, field):
        presentation = await _deck(presentation_service, 1)
        original = presentation.slides[0]

        with pytest.raises(ValidationError, match=field):
            await presentation_service.update_slide(presentation.id, original.id, **{field: 2024})

        stored = await presentation_service.get_presentation(presentation.id)
        assert stored.slides[0] == original
        assert (await presentation_service.list_presentations()).skipped == 0


class TestDeleteSlide:
    async def test_renumbers_remaining(self, presentation_service):
        presentation = await _deck(presentation_service, 4)
        middle = presentation.sorted_slides()[1]

        result = await presentation_service.delete_slide(presentation.id, middle.id)

        assert _orders(result) == [0, 1, 2]
        assert [s.title for s in result.sorted_slides()] == ["Slide 0", "Slide 2", "Slide 3"]

    async def test_deleting_only_slide_keeps_presentation(self, presentation_service):
        presentation = await _deck(presentation_service, 1)
        await presentation_service.delete_slide(presentation.id, presentation.slides[0].id)

        stored = await presentation_service.get_presentation(presentation.id)
        assert stored.slides == []

    async def test_unknown_slide(self, presentation_service):
        presentation = await _deck(presentation_service, 1)
        with pytest.raises(SlideNotFoundError):
            await presentation_service.delete_slide(presentation.id, "nope")


class TestReorderSlides:
    async def test_order_follows_input(self, presentation_service):
        presentation = await _deck(presentation_service, 3)
        ids = [s.id for s in presentation.sorted_slides()]
        new_order = [ids[2], ids[0], ids[1]]

        result = await presentation_service.reorder_slides(presentation.id, new_order)

        assert [s.id for s in result.sorted_slides()] == new_order
        assert _orders(result) == [0, 1, 2]
        stored = await presentation_service.get_presentation(presentation.id)
        assert [s.id for s in stored.sorted_slides()] == new_order

    async def test_unknown_id_leaves_order_unchanged(self, presentation_service):
        presentation = await _deck(presentation_service, 3)
        ids = [s.id for s in presentation.sorted_slides()]

        with pytest.raises(SlideNotFoundError):
            await presentation_service.reorder_slides(presentation.id, [ids[1], "bogus", ids[0]])

        stored = await presentation_service.get_presentation(presentation.id)
        assert [s.id for s in stored.sorted_slides()] == ids
        assert stored.updated_at == presentation.updated_at

    @pytest.mark.parametrize(
        "pick",
        [
            lambda ids: ids[:2],
            lambda ids: [ids[0], ids[0], ids[1]],
            lambda ids: ids + [ids[0]],
        ],
        ids=["missing", "duplicate", "extra"],
    )
    async def test_non_permutation_rejected(self, presentation_service, pick):
        presentation = await _deck(presentation_service, 3)
        ids = [s.id for s in presentation.sorted_slides()]

        with pytest.raises(ValidationError):
            await presentation_service.reorder_slides(presentation.id, pick(ids))

        stored = await presentation_service.get_presentation(presentation.id)
        assert [s.id for s in stored.sorted_slides()] == ids

    async def test_unknown_presentation(self, presentation_service):
        with pytest.raises(PresentationNotFoundError):
            await presentation_service.reorder_slides("missing", [])


class TestOrderingInvariant:
    async def test_dense_after_mixed_mutations(self, presentation_service):
        presentation = await _deck(presentation_service, 5)
        ids = [s.id for s in presentation.sorted_slides()]

        await presentation_service.delete_slide(presentation.id, ids[0])
        await presentation_service.add_slide(presentation.id, "New", HTML)
        current = await presentation_service.get_presentation(presentation.id)
        reversed_ids = [s.id for s in reversed(current.sorted_slides())]
        await presentation_service.reorder_slides(presentation.id, reversed_ids)
        await presentation_service.delete_slide(presentation.id, reversed_ids[2])

        stored = await presentation_service.get_presentation(presentation.id)
        assert _orders(stored) == list(range(len(stored.slides)))
        assert len(stored.slides) == 4

    async def test_concurrent_adds_are_not_lost(self, presentation_service):
        presentation = await presentation_service.create_presentation("Deck")

        await asyncio.gather(
            *(presentation_service.add_slide(presentation.id, f"S{i}", HTML) for i in range(10))
        )

        stored = await presentation_service.get_presentation(presentation.id)
        assert len(stored.slides) == 10
        assert _orders(stored) == list(range(10))
