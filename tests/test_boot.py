import copy
import json

import pytest

from nasclient.boot import (
    BootAttachRequest,
    BootClient,
    BootDisk,
    BootState,
    BootTopology,
    BootVdev,
)
from nasclient.errors import APIError, JobFailedError


class FakeCaller:
    def __init__(self):
        self.responses = {}
        self.errors = {}
        self.job_errors = {}
        self.calls = []
        self.job_calls = []

    def set_response(self, method, value):
        self.responses[method] = json.loads(json.dumps(value))

    def set_error(self, method, code, message):
        self.errors[method] = (code, message)

    def set_job_response(self, method, value):
        self.set_response(method, value)

    def set_job_error(self, method, message):
        self.job_errors[method] = message

    async def call(self, method, params=None, timeout=None):
        self.calls.append((method, params))
        if method in self.errors:
            code, message = self.errors[method]
            raise APIError(message=message, code=code)
        return copy.deepcopy(self.responses.get(method))

    async def call_job(self, method, params=None, timeout=None):
        self.job_calls.append((method, params))
        if method in self.job_errors:
            raise JobFailedError(1, self.job_errors[method], method)
        return copy.deepcopy(self.responses.get(method))


@pytest.fixture
def caller():
    return FakeCaller()


@pytest.fixture
def client(caller):
    return BootClient(caller)


def sample_disks():
    return [
        BootDisk(
            name="sda",
            label="boot-disk-1",
            size=120000000000,
            path="/dev/sda",
            status="ONLINE",
            serial="SERIAL-0001",
            model="WD Blue",
            type="HDD",
            available=True,
        ),
        BootDisk(
            name="sdb",
            label="boot-disk-2",
            size=120000000000,
            path="/dev/sdb",
            status="ONLINE",
            serial="SERIAL-0002",
            model="WD Red",
            type="HDD",
            available=False,
        ),
    ]


def sample_state():
    return BootState(
        name="boot-pool",
        id="boot-pool-id",
        guid="guid-0001",
        hostname="truenas.local",
        status="ONLINE",
        scan=None,
        properties={"version": "5000", "readonly": "off", "autotrim": "off"},
        groups=[
            BootVdev(
                name="mirror-0",
                type="mirror",
                status="ONLINE",
                children=[
                    BootVdev(name="sda1", type="disk", status="ONLINE", device="sda1", disk="sda", path="/dev/sda1"),
                    BootVdev(name="sdb1", type="disk", status="ONLINE", device="sdb1", disk="sdb", path="/dev/sdb1"),
                ],
            )
        ],
        topology=BootTopology(data=[BootVdev(name="mirror-0", type="mirror", status="ONLINE")]),
        healthy=True,
    )


def test_client_holds_caller(caller):
    assert BootClient(caller).client is caller


@pytest.mark.asyncio
async def test_get_disks(caller, client):
    disks = sample_disks()
    caller.set_response("boot.get_disks", [d.to_dict() for d in disks])
    result = await client.get_disks()
    assert len(result) == 2
    assert result[0] == disks[0]
    assert result[0].size == 120000000000
    assert result[1].available is False
    assert caller.calls == [("boot.get_disks", [])]


@pytest.mark.asyncio
async def test_get_disks_empty(caller, client):
    caller.set_response("boot.get_disks", [])
    assert await client.get_disks() == []


@pytest.mark.asyncio
async def test_get_disks_error(caller, client):
    caller.set_error("boot.get_disks", 500, "Internal server error")
    with pytest.raises(APIError) as info:
        await client.get_disks()
    assert info.value.code == 500
    assert info.value.message == "Internal server error"


@pytest.mark.asyncio
async def test_get_state(caller, client):
    state = sample_state()
    caller.set_response("boot.get_state", state.to_dict())
    result = await client.get_state()
    assert result.name == "boot-pool"
    assert result.id == "boot-pool-id"
    assert result.guid == "guid-0001"
    assert result.hostname == "truenas.local"
    assert result.status == "ONLINE"
    assert result.healthy is True
    assert result.warning is False
    assert result.unknown is False
    assert len(result.groups) == 1
    assert len(result.topology.data) == 1
    assert result == state


@pytest.mark.asyncio
async def test_get_state_error(caller, client):
    caller.set_error("boot.get_state", 403, "Access denied")
    with pytest.raises(APIError) as info:
        await client.get_state()
    assert info.value.code == 403
    assert info.value.message == "Access denied"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "device, expand, options",
    [("sdc", False, {}), ("sdd", True, {"expand": True}), ("", False, {})],
)
async def test_attach(caller, client, device, expand, options):
    caller.set_job_response("boot.attach", None)
    assert await client.attach(device, expand) is None
    assert caller.job_calls == [("boot.attach", [device, options])]


@pytest.mark.asyncio
async def test_attach_job_failure(caller, client):
    caller.set_job_error("boot.attach", "Device not found")
    with pytest.raises(JobFailedError, match="Device not found"):
        await client.attach("sde", False)


@pytest.mark.asyncio
@pytest.mark.parametrize("device", ["sdc", ""])
async def test_detach(caller, client, device):
    caller.set_response("boot.detach", True)
    assert await client.detach(device) is None
    assert caller.calls == [("boot.detach", [device])]


@pytest.mark.asyncio
async def test_detach_error(caller, client):
    caller.set_error("boot.detach", 404, "Device not found in boot pool")
    with pytest.raises(APIError) as info:
        await client.detach("sde")
    assert info.value.code == 404
    assert info.value.message == "Device not found in boot pool"


@pytest.mark.asyncio
@pytest.mark.parametrize("label, device", [("boot-disk-1", "sdc"), ("", "sdc"), ("boot-disk-1", "")])
async def test_replace(caller, client, label, device):
    caller.set_response("boot.replace", True)
    assert await client.replace(label, device) is None
    assert caller.calls == [("boot.replace", [label, device])]


@pytest.mark.asyncio
async def test_replace_error(caller, client):
    caller.set_error("boot.replace", 404, "Label not found in boot pool")
    with pytest.raises(APIError) as info:
        await client.replace("nonexistent-label", "sdc")
    assert info.value.code == 404
    assert info.value.message == "Label not found in boot pool"


@pytest.mark.asyncio
async def test_scrub(caller, client):
    caller.set_job_response("boot.scrub", None)
    assert await client.scrub() is None
    assert caller.job_calls == [("boot.scrub", [])]


@pytest.mark.asyncio
async def test_scrub_failure(caller, client):
    caller.set_job_error("boot.scrub", "Scrub already in progress")
    with pytest.raises(JobFailedError, match="Scrub already in progress"):
        await client.scrub()


@pytest.mark.asyncio
@pytest.mark.parametrize("interval", [7, 30, 0])
async def test_get_scrub_interval(caller, client, interval):
    caller.set_response("boot.get_scrub_interval", interval)
    assert await client.get_scrub_interval() == interval


@pytest.mark.asyncio
async def test_get_scrub_interval_error(caller, client):
    caller.set_error("boot.get_scrub_interval", 500, "Failed to get scrub interval")
    with pytest.raises(APIError) as info:
        await client.get_scrub_interval()
    assert info.value.code == 500
    assert info.value.message == "Failed to get scrub interval"


@pytest.mark.asyncio
@pytest.mark.parametrize("interval", [7, 30, 0, -1, 365])
async def test_set_scrub_interval(caller, client, interval):
    caller.set_response("boot.set_scrub_interval", True)
    assert await client.set_scrub_interval(interval) is None
    assert caller.calls == [("boot.set_scrub_interval", [interval])]


@pytest.mark.asyncio
async def test_set_scrub_interval_error(caller, client):
    caller.set_error("boot.set_scrub_interval", 400, "Invalid scrub interval")
    with pytest.raises(APIError) as info:
        await client.set_scrub_interval(7)
    assert info.value.code == 400
    assert info.value.message == "Invalid scrub interval"


def test_attach_request():
    assert BootAttachRequest(device="sdc", expand=True).to_dict() == {"dev": "sdc", "expand": True}
    req = BootAttachRequest(device="sdd")
    assert req.expand is False
    assert req.to_dict() == {"dev": "sdd"}


def test_boot_disk_round_trip():
    disk = sample_disks()[0]
    decoded = BootDisk.from_dict(json.loads(json.dumps(disk.to_dict())))
    assert decoded == disk
    assert decoded.size == 120000000000


def test_boot_state_round_trip():
    state = sample_state()
    state.scan = {"function": "scrub", "state": "finished"}
    decoded = BootState.from_dict(json.loads(json.dumps(state.to_dict())))
    assert decoded == state
    assert decoded.groups[0].children[0].name == "sda1"
    assert len(decoded.properties) == 3


def test_vdev_omits_empty_device_fields():
    vdev = BootVdev(name="mirror-0", type="mirror", status="ONLINE")
    data = vdev.to_dict()
    assert "device" not in data
    assert "disk" not in data
    assert "path" not in data
    assert BootVdev.from_dict(data) == vdev


def test_vdev_round_trip_with_stats():
    vdev = BootVdev(
        name="sda1",
        type="disk",
        status="ONLINE",
        stats={"read_errors": 0, "write_errors": 0},
        device="sda1",
        disk="sda",
        path="/dev/sda1",
    )
    decoded = BootVdev.from_dict(vdev.to_dict())
    assert decoded == vdev
    assert decoded.children == []


def test_topology_round_trip():
    topology = BootTopology(
        data=[BootVdev(name="mirror-0", type="mirror", status="ONLINE")],
        log=[BootVdev(name="log-0", type="disk", status="ONLINE")],
        cache=[BootVdev(name="cache-0", type="disk", status="ONLINE")],
        spare=[BootVdev(name="spare-0", type="disk", status="AVAIL")],
        special=[BootVdev(name="special-0", type="disk", status="ONLINE")],
        dedup=[BootVdev(name="dedup-0", type="disk", status="ONLINE")],
    )
    decoded = BootTopology.from_dict(topology.to_dict())
    assert decoded == topology
    assert decoded.spare[0].status == "AVAIL"
    assert decoded.dedup[0].name == "dedup-0"


def test_topology_from_missing_lists():
    assert BootTopology.from_dict({"data": None}) == BootTopology()