"""
Tests for Attachment.

Test Organization:
1. States and assignment
2. Content loading (pending, lazy fetch, empty)
3. Magic attributes
4. Property lookup precedence
5. URLs
"""

import pytest

from attachkit.core.analysis import MISSING
from attachkit.core.host import ObjectHostBinding
from attachkit.models import AttachmentState, ContentKey, EphemeralContent
from attachkit.utils.exceptions import AttachmentEmpty, DataNotFound


@pytest.fixture
def persisted(app, item):
    """Item whose preview_image has been committed, reloaded into a fresh attachment."""
    first = app.attachment(ObjectHostBinding(item, "preview_image"))
    first.assign("DATASTRING")
    first.commit()
    app.store.calls.clear()
    return app.attachment(ObjectHostBinding(item, "preview_image"))


class TestAssignment:
    """Tests for states and assign()."""

    def test_starts_empty(self, attachment, item):
        assert attachment.state == AttachmentState.EMPTY
        assert attachment.is_empty
        assert attachment.key is None
        assert item.preview_image_uid is None

    def test_starts_persisted_when_host_has_key(self, app, make_item):
        item = make_item(preview_image_uid="2024/01/01/abc")

        attachment = app.attachment(ObjectHostBinding(item, "preview_image"))

        assert attachment.is_persisted
        assert attachment.key == ContentKey("2024/01/01/abc")

    def test_assign_data_is_pending(self, attachment):
        attachment.assign("DATASTRING")

        assert attachment.state == AttachmentState.PENDING
        assert attachment.is_pending
        assert attachment.key is None
        assert attachment.has_changes

    def test_assign_does_not_touch_store(self, attachment, recording_store):
        attachment.assign("DATASTRING")
        attachment.assign("ANEWDATASTRING")
        attachment.assign(None)

        assert recording_store.calls == []

    def test_assign_key_is_persisted_without_loading(self, attachment, recording_store):
        attachment.assign(ContentKey("2024/01/01/abc"))

        assert attachment.is_persisted
        assert attachment.key == "2024/01/01/abc"
        assert recording_store.calls == []

    def test_plain_string_is_data_not_key(self, attachment):
        attachment.assign("2024/01/01/abc")

        assert attachment.is_pending
        assert attachment.data == b"2024/01/01/abc"

    def test_assign_none_clears(self, persisted):
        persisted.assign(None)

        assert persisted.is_empty
        assert persisted.key is None
        assert persisted.committed_key is not None
        assert persisted.superseded_key == persisted.committed_key

    def test_assign_none_when_empty_has_no_changes(self, attachment):
        attachment.assign(None)

        assert not attachment.has_changes

    def test_reassigning_committed_key_has_no_changes(self, persisted):
        persisted.assign(ContentKey(persisted.key))

        assert not persisted.has_changes
        assert persisted.superseded_key is None

    @pytest.mark.parametrize("interim", ["abc", None])
    def test_reassigning_committed_key_after_interim_change(self, persisted, item, interim):
        persisted.assign(interim)

        persisted.assign(ContentKey(persisted.committed_key))

        assert persisted.has_changes
        assert persisted.needs_magic_refresh
        assert persisted.superseded_key is None
        assert persisted.size == 10

    def test_assign_data_over_persisted_marks_old_key(self, persisted):
        old_key = persisted.key

        persisted.assign("ANEWDATASTRING")

        assert persisted.is_pending
        assert persisted.superseded_key == old_key

    def test_assign_with_name(self, attachment):
        attachment.assign(b"\x89PNG", name="image.png")

        assert attachment.name == "image.png"
        assert attachment.ext == "png"


class TestContent:
    """Tests for content()."""

    def test_pending_content_returned_directly(self, attachment, recording_store):
        attachment.assign("DATASTRING")

        content = attachment.content()

        assert isinstance(content, EphemeralContent)
        assert content.data == b"DATASTRING"
        assert recording_store.calls == []

    def test_persisted_content_fetched_once(self, persisted, recording_store):
        first = persisted.content()
        second = persisted.content()

        assert first is second
        assert first.data == b"DATASTRING"
        assert recording_store.calls_of("fetch") == [persisted.key]

    def test_empty_content_is_none(self, attachment):
        assert attachment.content() is None
        assert attachment.data is None

    def test_empty_content_required(self, attachment):
        with pytest.raises(AttachmentEmpty):
            attachment.content(required=True)

    def test_missing_data_propagates_on_fetch(self, app, make_item):
        item = make_item(preview_image_uid="2024/01/01/gone")
        attachment = app.attachment(ObjectHostBinding(item, "preview_image"))

        with pytest.raises(DataNotFound):
            attachment.content()

    def test_new_assignment_replaces_content(self, persisted):
        persisted.assign("ANEWDATASTRING")

        assert persisted.content().data == b"ANEWDATASTRING"
        assert persisted.size == 14


class TestMagicAttributes:
    """Tests for host-persisted magic attributes."""

    def test_default_none(self, attachment, item):
        assert item.preview_image_some_analyser_method is None

    def test_set_when_assigned(self, attachment, item):
        attachment.assign("123")

        assert item.preview_image_some_analyser_method == "abc1"
        assert item.preview_image_size == 3

    def test_updated_when_reassigned(self, attachment, item):
        attachment.assign("123")
        attachment.assign("456")

        assert item.preview_image_some_analyser_method == "abc4"

    def test_reset_when_cleared(self, attachment, item):
        attachment.assign("123")
        attachment.assign(None)

        assert item.preview_image_some_analyser_method is None
        assert item.preview_image_size is None

    def test_non_magic_attributes_untouched(self, app, make_item):
        item = make_item(preview_image_some_analyser_method=None, preview_image_blah_blah="wassup")
        attachment = app.attachment(ObjectHostBinding(item, "preview_image"))

        attachment.assign("123")
        attachment.assign(None)

        assert item.preview_image_blah_blah == "wassup"

    def test_name_and_ext_from_original_filename(self, app, make_item):
        class Upload(str):
            original_filename = "hello.png"

        item = make_item(preview_image_name=None, preview_image_ext=None)
        attachment = app.attachment(ObjectHostBinding(item, "preview_image"))

        attachment.assign(Upload("jasdlkf sadjl"))

        assert item.preview_image_name == "hello.png"
        assert item.preview_image_ext == "png"

    def test_only_existing_slots_written(self, app, make_item):
        item = make_item()
        attachment = app.attachment(ObjectHostBinding(item, "preview_image"))

        attachment.assign("123")

        assert vars(item) == {"preview_image_uid": None}


class TestReadProperty:
    """Tests for read_property() precedence."""

    def test_analyser_property_of_pending_content(self, attachment):
        attachment.assign("DATASTRING")

        assert attachment.read_property("number_of_As") == 2

    def test_updates_when_new_content_assigned(self, attachment):
        attachment.assign("DATASTRING")
        attachment.read_property("number_of_As")
        attachment.assign("ANEWDATASTRING")

        assert attachment.read_property("number_of_As") == 3

    def test_unknown_property_is_missing(self, attachment):
        attachment.assign("DATASTRING")

        assert attachment.read_property("eggbert") is MISSING

    def test_empty_property_is_none(self, attachment):
        assert attachment.read_property("number_of_As") is None

    def test_magic_attribute_avoids_fetch(self, persisted, item, recording_store):
        item.preview_image_some_analyser_method = "result yo"

        assert persisted.read_property("some_analyser_method") == "result yo"
        assert recording_store.calls_of("fetch") == []

    @pytest.mark.parametrize("attribute", ["size", "name", "ext"])
    def test_magic_attribute_for_intrinsic_properties(self, persisted, item, recording_store, attribute):
        setattr(item, f"preview_image_{attribute}", "result yo")

        assert getattr(persisted, attribute) == "result yo"
        assert recording_store.calls_of("fetch") == []

    def test_fetches_when_no_magic_attribute(self, persisted, recording_store):
        assert persisted.read_property("number_of_As") == 2
        assert persisted.read_property("number_of_As") == 2

        assert recording_store.calls_of("fetch") == [persisted.key]

    @pytest.mark.parametrize("attribute", ["size", "name", "ext"])
    def test_intrinsic_properties_without_magic_slots(self, app, recording_store, make_item, attribute):
        item = make_item()
        writer = app.attachment(ObjectHostBinding(item, "preview_image"))
        writer.assign(EphemeralContent(data=b"DATASTRING", name="jonny.briggs"))
        key = writer.commit()
        recording_store.calls.clear()

        reader = app.attachment(ObjectHostBinding(item, "preview_image"))
        expected = {"size": 10, "name": "jonny.briggs", "ext": "briggs"}[attribute]

        assert getattr(reader, attribute) == expected
        assert recording_store.calls_of("fetch") == [key]

    def test_magic_ignored_after_key_assignment_until_commit(self, persisted, item, recording_store):
        other = recording_store.store(EphemeralContent(data=b"GGG"))
        item.preview_image_size = 10

        persisted.assign(ContentKey(other))

        assert persisted.size == 3


class TestUrl:
    """Tests for url()."""

    def test_pending_has_no_url(self, attachment):
        attachment.assign("DATASTRING")

        assert attachment.url() is None

    def test_empty_has_no_url(self, attachment):
        assert attachment.url() is None

    def test_persisted_url(self, persisted):
        assert persisted.url() == f"/media/{persisted.key}"

    def test_url_params(self, persisted):
        assert persisted.url(size="100x100") == f"/media/{persisted.key}?size=100x100"

    def test_repr(self, attachment):
        assert repr(attachment) == "Attachment(field='preview_image', state=empty, key=None)"
