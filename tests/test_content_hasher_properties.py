"""Property-based tests for canonical serialization and fingerprinting."""

import hashlib
import json
from typing import Any

from hypothesis import given, settings
from hypothesis import strategies as st

from aimeswitcher.models.records import Content, RatingRecord
from aimeswitcher.processing.content_hasher import ContentHasher

json_blobs = st.recursive(
    st.none() | st.booleans() | st.integers(min_value=-(10**6), max_value=10**6) | st.text(max_size=8),
    lambda children: st.lists(children, max_size=3)
    | st.dictionaries(st.text(max_size=5), children, max_size=3),
    max_leaves=6,
)


@st.composite
def rating_record_strategy(draw: st.DrawFn, record_id: int) -> RatingRecord:
    """Generate a rating record with the given primary key."""
    return RatingRecord(
        id=record_id,
        user=draw(st.integers(min_value=1, max_value=10**6)),
        version=draw(st.integers(min_value=0, max_value=30)),
        rating=draw(st.integers(min_value=0, max_value=20000)),
        rating_list=draw(json_blobs),
        new_rating_list=draw(json_blobs),
        next_rating_list=draw(json_blobs),
        next_new_rating_list=draw(json_blobs),
        udemae=draw(json_blobs),
    )


@st.composite
def content_strategy(draw: st.DrawFn) -> Content:
    """Generate Content with ascending rating record ids."""
    ids = draw(st.lists(st.integers(min_value=1, max_value=10**6), max_size=5, unique=True))
    records = [draw(rating_record_strategy(record_id)) for record_id in sorted(ids)]
    return Content(rating_records=records, profile_details=[])


class TestSerialization:
    @given(content=content_strategy())
    @settings(max_examples=100, deadline=None)
    def test_serializing_twice_is_byte_identical(self, content: Content) -> None:
        hasher = ContentHasher()

        assert hasher.serialize(content) == hasher.serialize(content)

    @given(content=content_strategy())
    @settings(max_examples=100, deadline=None)
    def test_rebuilt_content_serializes_identically(self, content: Content) -> None:
        hasher = ContentHasher()
        rebuilt = Content.model_validate(content.model_dump())

        assert hasher.serialize(rebuilt) == hasher.serialize(content)

    @given(content=content_strategy())
    @settings(max_examples=50, deadline=None)
    def test_serialized_document_is_valid_json(self, content: Content) -> None:
        document = json.loads(ContentHasher().serialize(content))

        assert document["version"] == 1
        assert len(document["rating_records"]) == len(content.rating_records)

    def test_field_order_is_declaration_order(self) -> None:
        content = Content(
            rating_records=[
                RatingRecord(
                    id=1,
                    user=2,
                    version=3,
                    rating=4,
                    rating_list=[],
                    new_rating_list=[],
                    next_rating_list=None,
                    next_new_rating_list=[],
                    udemae={"b": 1, "a": 2},
                )
            ]
        )

        data = ContentHasher().serialize(content)

        assert data == (
            b'{"rating_records":[{"id":1,"user":2,"version":3,"rating":4,'
            b'"ratingList":[],"newRatingList":[],"nextRatingList":null,'
            b'"nextNewRatingList":[],"udemae":{"b":1,"a":2}}],'
            b'"profile_details":[],"version":1}'
        )

    def test_non_ascii_text_is_utf8(self) -> None:
        record = RatingRecord(
            id=1,
            user=1,
            version=1,
            rating=1,
            rating_list=["でらっくす"],
            new_rating_list=None,
            next_rating_list=None,
            next_new_rating_list=None,
            udemae=None,
        )

        data = ContentHasher().serialize(Content(rating_records=[record]))

        assert "でらっくす".encode("utf-8") in data


class TestFingerprint:
    @given(data=st.binary(max_size=4096))
    @settings(max_examples=100, deadline=None)
    def test_fingerprint_is_deterministic(self, data: bytes) -> None:
        hasher = ContentHasher()

        assert hasher.fingerprint(data) == hasher.fingerprint(bytes(data))

    @given(data=st.binary(max_size=4096))
    @settings(max_examples=100, deadline=None)
    def test_fingerprint_is_lowercase_sha256_hex(self, data: bytes) -> None:
        digest = ContentHasher().fingerprint(data)

        assert digest == hashlib.sha256(data).hexdigest()
        assert len(digest) == 64
        assert digest == digest.lower()

    @given(content=content_strategy(), bump=st.integers(min_value=1, max_value=100))
    @settings(max_examples=50, deadline=None)
    def test_changed_rating_changes_fingerprint(self, content: Content, bump: int) -> None:
        hasher = ContentHasher()
        changed_records: list[Any] = [
            record.model_copy(update={"rating": record.rating + bump})
            for record in content.rating_records
        ]
        changed = Content(rating_records=changed_records, profile_details=[])

        _, original_digest = hasher.serialize_and_fingerprint(content)
        _, changed_digest = hasher.serialize_and_fingerprint(changed)

        if content.rating_records:
            assert original_digest != changed_digest
        else:
            assert original_digest == changed_digest
