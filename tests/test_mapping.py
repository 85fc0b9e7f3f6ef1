"""Tests for EC2 response conversion."""

import copy
from datetime import datetime, timezone

import pytest

from ec2map.aws.mapping import (
    CONVERTERS,
    converter,
    merge_tags,
    normalize_key,
    to_mapping,
    to_mappings,
)
from ec2map.base.exceptions import UnsupportedShapeError

LAUNCH_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)

INSTANCE = {
    "InstanceId": "i-1",
    "State": {"Code": 16, "Name": "running"},
    "InstanceType": "t3.micro",
    "Placement": {"AvailabilityZone": "us-east-1a", "GroupName": "", "Tenancy": "default"},
    "Tags": [{"Key": "Name", "Value": "a"}, {"Key": "Env", "Value": "b"}],
    "ImageId": "ami-1",
    "LaunchTime": LAUNCH_TIME,
    "PrivateIpAddress": "10.0.0.1",
}

IMAGE = {
    "Architecture": "x86_64",
    "BlockDeviceMappings": [
        {
            "DeviceName": "/dev/xvda",
            "Ebs": {
                "DeleteOnTermination": True,
                "Iops": 3000,
                "SnapshotId": "snap-1",
                "VolumeSize": 8,
                "VolumeType": "gp3",
                "Encrypted": False,
            },
        },
        {"DeviceName": "/dev/sdb", "VirtualName": "ephemeral0"},
    ],
    "Description": "base image",
    "Hypervisor": "xen",
    "ImageId": "ami-1",
    "ImageLocation": "123456789012/base",
    "ImageType": "machine",
    "Name": "base",
    "OwnerId": "123456789012",
    "ProductCodes": [{"ProductCodeId": "pc-1", "ProductCodeType": "marketplace"}],
    "Public": False,
    "RootDeviceName": "/dev/xvda",
    "RootDeviceType": "ebs",
    "State": "available",
    "StateReason": {"Code": "ok", "Message": "fine"},
    "Tags": [{"Key": "team_name", "Value": "infra"}],
    "VirtualizationType": "hvm",
}


class TestHelpers:
    def test_normalize_key(self):
        assert normalize_key("Cost_Center") == "cost-center"
        assert normalize_key("aws:cloudformation:stack-name") == "aws:cloudformation:stack-name"

    def test_merge_tags(self):
        tags = [{"Key": "Name", "Value": "a"}, {"Key": "Env", "Value": "b"}]
        assert merge_tags(tags) == {"name": "a", "env": "b"}

    def test_merge_tags_last_wins(self):
        tags = [
            {"Key": "Owner_Team", "Value": "first"},
            {"Key": "owner-team", "Value": "second"},
        ]
        assert merge_tags(tags) == {"owner-team": "second"}

    @pytest.mark.parametrize("tags", [None, []])
    def test_merge_no_tags(self, tags):
        assert merge_tags(tags) is None

    def test_to_mappings_keeps_order(self):
        groups = [{"GroupId": "sg-2"}, {"GroupId": "sg-1"}]
        assert [g["id"] for g in to_mappings("GroupIdentifier", groups)] == ["sg-2", "sg-1"]

    def test_to_mappings_none(self):
        assert to_mappings("Instance", None) == []


class TestDispatch:
    @pytest.mark.parametrize("shape", sorted(CONVERTERS))
    def test_none_is_none(self, shape):
        assert to_mapping(shape, None) is None

    @pytest.mark.parametrize("shape", sorted(CONVERTERS))
    def test_empty_structure_is_total(self, shape):
        result = to_mapping(shape, {})
        assert isinstance(result, dict)

    def test_unknown_shape(self):
        with pytest.raises(UnsupportedShapeError, match="VpcEndpoint"):
            to_mapping("VpcEndpoint", {"VpcEndpointId": "vpce-1"})

    def test_duplicate_registration_rejected(self):
        with pytest.raises(ValueError, match="already registered"):
            converter("Tag")(lambda tag: {})

    def test_register_new_shape(self):
        @converter("TestOnlyShape")
        def _shape(obj):
            return {"value": obj.get("Value")}

        try:
            assert to_mapping("TestOnlyShape", {"Value": 1}) == {"value": 1}
        finally:
            del CONVERTERS["TestOnlyShape"]

    def test_source_not_mutated(self):
        for shape, obj in (("Instance", INSTANCE), ("Image", IMAGE)):
            before = copy.deepcopy(obj)
            to_mapping(shape, obj)
            assert obj == before


class TestInstanceShapes:
    def test_instance(self):
        result = to_mapping("Instance", INSTANCE)
        assert result == {
            "id": "i-1",
            "state": {"name": "running", "code": 16},
            "type": "t3.micro",
            "placement": {"availability-zone": "us-east-1a", "group-name": "", "tenancy": "default"},
            "tags": {"name": "a", "env": "b"},
            "image": "ami-1",
            "launch-time": LAUNCH_TIME,
        }

    def test_launch_time_passes_through(self):
        assert to_mapping("Instance", INSTANCE)["launch-time"] is LAUNCH_TIME

    def test_instance_without_placement(self):
        result = to_mapping("Instance", {"InstanceId": "i-2"})
        assert result["placement"] is None
        assert result["state"] is None
        assert result["tags"] is None

    def test_reservation(self):
        reservation = {
            "ReservationId": "r-1",
            "Instances": [INSTANCE],
            "Groups": [{"GroupId": "sg-1", "GroupName": "web"}],
        }
        result = to_mapping("Reservation", reservation)
        assert result["instances"][0]["id"] == "i-1"
        assert result["groups"] == [{"id": "sg-1", "name": "web"}]
        assert result["group-names"] == ["web"]

    def test_group_names_line_up_with_groups(self):
        result = to_mapping("Reservation", {
            "Groups": [{"GroupId": "sg-1"}, {"GroupId": "sg-2", "GroupName": "web"}],
        })
        assert result["group-names"] == [None, "web"]
        assert len(result["group-names"]) == len(result["groups"])

    def test_state_change(self):
        change = {
            "InstanceId": "i-1",
            "CurrentState": {"Code": 64, "Name": "stopping"},
            "PreviousState": {"Code": 16, "Name": "running"},
        }
        assert to_mapping("InstanceStateChange", change) == {
            "id": "i-1",
            "current-state": {"name": "stopping", "code": 64},
            "previous-state": {"name": "running", "code": 16},
        }


class TestImageShapes:
    def test_image(self):
        result = to_mapping("Image", IMAGE)
        assert result["image-id"] == "ami-1"
        assert result["public"] is False
        assert result["tags"] == {"team-name": "infra"}
        assert result["state-reason"] == {"code": "ok", "message": "fine"}
        assert result["product-codes"] == [
            {"product-code-id": "pc-1", "product-code-type": "marketplace"}
        ]
        assert result["kernel-id"] is None
        assert result["image-owner-alias"] is None

    def test_block_device_mappings(self):
        mappings = to_mapping("Image", IMAGE)["block-device-mappings"]
        assert mappings[0] == {
            "device-name": "/dev/xvda",
            "ebs": {
                "delete-on-termination": True,
                "iops": 3000,
                "snapshot-id": "snap-1",
                "volume-size": 8,
                "volume-type": "gp3",
            },
            "no-device": None,
            "virtual-name": None,
        }
        assert mappings[1]["ebs"] is None
        assert mappings[1]["virtual-name"] == "ephemeral0"

    def test_image_keys(self):
        assert set(to_mapping("Image", {})) == {
            "architecture", "block-device-mappings", "description", "hypervisor",
            "image-id", "image-location", "image-owner-alias", "image-type",
            "kernel-id", "name", "owner-id", "platform", "product-codes", "public",
            "ramdisk-id", "root-device-name", "root-device-type", "state",
            "state-reason", "tags", "virtualization-type",
        }
