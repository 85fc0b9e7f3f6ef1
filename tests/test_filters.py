"""Tests for EC2 query builders."""

import pytest
from pydantic import ValidationError

from ec2map.aws.filters import (
    Filter,
    ImageQuery,
    InstanceQuery,
    image_filter,
    image_id_filter,
    image_owner_filter,
    instance_filter,
    instance_id_filter,
    make_filter,
    tag_filter,
)


class TestMakeFilter:
    def test_values(self):
        f = make_filter("instance-state-name", ["running", "stopped"])
        assert f.name == "instance-state-name"
        assert f.values == ("running", "stopped")

    def test_bare_string_is_one_value(self):
        assert make_filter("tag:Name", "web").values == ("web",)

    def test_unknown_name_accepted(self):
        assert make_filter("no-such-filter", []).name == "no-such-filter"

    def test_to_request(self):
        f = make_filter("tag:Name", ["web"])
        assert f.to_request() == {"Name": "tag:Name", "Values": ["web"]}

    def test_tag_filter(self):
        assert tag_filter("Env", ["prod"]) == make_filter("tag:Env", ["prod"])

    def test_frozen(self):
        f = make_filter("a", ["b"])
        with pytest.raises(ValidationError):
            f.name = "c"


class TestInstanceQuery:
    def test_instance_id_filter_equivalence(self):
        assert instance_id_filter("i-beefcafe") == instance_filter(
            make_filter("instance-id", ["i-beefcafe"])
        )

    def test_to_request(self):
        query = instance_filter(make_filter("tag:Name", ["web"]), make_filter("instance-type", ["t3.micro"]))
        assert query.to_request() == {
            "Filters": [
                {"Name": "tag:Name", "Values": ["web"]},
                {"Name": "instance-type", "Values": ["t3.micro"]},
            ]
        }

    def test_empty_query(self):
        assert InstanceQuery().to_request() == {}

    def test_instance_ids(self):
        assert InstanceQuery(instance_ids="i-1").to_request() == {"InstanceIds": ["i-1"]}


class TestImageQuery:
    def test_owner_filter(self):
        query = image_owner_filter("self")
        assert query.owners == ("self",)
        assert query.filters == ()
        assert query.to_request() == {"Owners": ["self"]}

    def test_image_id_filter(self):
        query = image_id_filter("ami-1")
        assert query == image_filter([make_filter("image-id", ["ami-1"])])
        assert query.to_request() == {"Filters": [{"Name": "image-id", "Values": ["ami-1"]}]}
        assert query.owners == ()

    def test_image_id_filter_stringifies(self):
        assert image_id_filter(123).filters[0].values == ("123",)

    def test_image_filter_single(self):
        f = make_filter("architecture", ["x86_64"])
        assert image_filter(f) == image_filter([f])
        assert image_filter(f).filters == (f,)

    def test_image_filter_many(self):
        query = image_filter([make_filter("architecture", ["x86_64"]), make_filter("is-public", ["false"])])
        assert len(query.filters) == 2
        assert all(isinstance(f, Filter) for f in query.filters)

    def test_full_request(self):
        query = ImageQuery(
            filters=[make_filter("state", ["available"])],
            owners=["amazon"],
            image_ids=["ami-1"],
            executable_users=["all"],
        )
        assert query.to_request() == {
            "Filters": [{"Name": "state", "Values": ["available"]}],
            "Owners": ["amazon"],
            "ImageIds": ["ami-1"],
            "ExecutableUsers": ["all"],
        }
