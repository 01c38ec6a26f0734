"""Tests for the vCenter client."""

import httpx
import pytest

from cloudinv.api.auth import SESSION_HEADER
from cloudinv.api.exceptions import (
    APIError,
    AuthenticationError,
    DecodeError,
    NetworkError,
    RequestError,
)
from cloudinv.api.vsphere import VSphereClient
from cloudinv.models.config import AuthConfig, ProfileConfig
from cloudinv.models.vsphere import (
    ClusterFilter,
    FolderFilter,
    FolderType,
    HostFilter,
    PowerState,
    VMFilter,
)

HOST = "vcenter.example.com"

VMS = [
    {"vm": "vm-100", "name": "web-01", "power_state": "POWERED_ON", "cpu_count": 2, "memory_size_MiB": 4096},
    {"vm": "vm-200", "name": "db-01", "power_state": "POWERED_OFF", "cpu_count": 4, "memory_size_MiB": 16384},
]

ENDPOINTS = [
    ("get_vms", "/api/vcenter/vm", VMS),
    ("get_clusters", "/api/vcenter/cluster", [{"cluster": "domain-c8", "name": "prod", "ha_enabled": True, "drs_enabled": False}]),
    ("get_datacenters", "/api/vcenter/datacenter", [{"datacenter": "datacenter-2", "name": "DC1"}]),
    ("get_datastores", "/api/vcenter/datastore", [{"datastore": "datastore-11", "name": "ds1", "type": "VMFS", "capacity": 100, "free_space": 40}]),
    ("get_folders", "/api/vcenter/folder", [{"folder": "group-v4", "name": "vm", "type": "VIRTUAL_MACHINE"}]),
    ("get_hosts", "/api/vcenter/host", [{"host": "host-10", "name": "esx1", "connection_state": "CONNECTED", "power_state": "POWERED_ON"}]),
    ("get_networks", "/api/vcenter/network", [{"network": "network-13", "name": "VM Network", "type": "STANDARD_PORTGROUP"}]),
    ("get_resource_pools", "/api/vcenter/resource-pool", [{"resource_pool": "resgroup-9", "name": "Resources"}]),
]


def _client(handler) -> VSphereClient:
    return VSphereClient(HOST, "administrator@vsphere.local", "secret", transport=handler.transport)


class TestAuthentication:
    """Tests for session handling."""

    @pytest.mark.anyio
    async def test_authenticate_stores_session_id(self, make_handler) -> None:
        handler = make_handler()
        async with _client(handler) as client:
            await client.authenticate()
            assert client.session_id == handler.session_id

        (request,) = handler.calls("POST", "/api/session")
        assert request.url == httpx.URL(f"https://{HOST}/api/session")
        assert request.headers["Authorization"].startswith("Basic ")
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.anyio
    async def test_authenticate_failure_uses_status_text(self, make_handler) -> None:
        handler = make_handler(
            {
                ("POST", "/api/session"): lambda request: httpx.Response(
                    401, extensions={"reason_phrase": b"Failed to authenticate"}
                )
            }
        )
        async with _client(handler) as client:
            with pytest.raises(AuthenticationError) as exc_info:
                await client.authenticate()
            assert client.session_id is None

        assert str(exc_info.value) == "Failed to authenticate"
        assert exc_info.value.status_code == 401

    @pytest.mark.anyio
    async def test_authenticate_rejects_non_string_body(self, make_handler) -> None:
        handler = make_handler({("POST", "/api/session"): {"value": 1}})
        async with _client(handler) as client:
            with pytest.raises(AuthenticationError, match="Invalid response from server"):
                await client.authenticate()

    @pytest.mark.anyio
    async def test_connection_failure(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = VSphereClient(HOST, "u", "p", transport=httpx.MockTransport(refuse))
        async with client:
            with pytest.raises(AuthenticationError, match="Connection failed"):
                await client.authenticate()

    @pytest.mark.anyio
    async def test_list_before_authenticate_creates_one_session(self, make_handler) -> None:
        handler = make_handler({("GET", "/api/vcenter/vm"): VMS})
        async with _client(handler) as client:
            await client.get_vms()
            await client.get_vms()

        assert len(handler.calls("POST", "/api/session")) == 1
        for request in handler.calls("GET", "/api/vcenter/vm"):
            assert request.headers[SESSION_HEADER] == handler.session_id

    @pytest.mark.anyio
    async def test_logout_deletes_session(self, make_handler) -> None:
        handler = make_handler()
        async with _client(handler) as client:
            await client.authenticate()
            await client.logout()
            assert client.session_id is None

        (request,) = handler.calls("DELETE", "/api/session")
        assert request.headers[SESSION_HEADER] == handler.session_id


class TestListing:
    """Tests for the list operations."""

    @pytest.mark.anyio
    @pytest.mark.parametrize("method, path, body", ENDPOINTS)
    async def test_unfiltered_list_hits_bare_endpoint(self, make_handler, method, path, body) -> None:
        handler = make_handler({("GET", path): body})
        async with _client(handler) as client:
            records = await getattr(client, method)()

        (request,) = handler.calls("GET", path)
        assert str(request.url) == f"https://{HOST}{path}"
        assert [r.to_dict() for r in records] == body

    @pytest.mark.anyio
    async def test_empty_filter_adds_no_query(self, make_handler) -> None:
        handler = make_handler({("GET", "/api/vcenter/vm"): []})
        async with _client(handler) as client:
            assert await client.get_vms(VMFilter()) == []

        (request,) = handler.calls("GET", "/api/vcenter/vm")
        assert request.url.query == b""

    @pytest.mark.anyio
    async def test_multi_value_filters_keep_input_order(self, make_handler) -> None:
        handler = make_handler({("GET", "/api/vcenter/vm"): VMS})
        params = VMFilter(clusters=["cluster-1", "cluster-2"], vms=["vm-100", "vm-200"])
        async with _client(handler) as client:
            await client.get_vms(params)

        (request,) = handler.calls("GET", "/api/vcenter/vm")
        assert request.url.query.decode() == "clusters=cluster-1,cluster-2&vms=vm-100,vm-200"

    @pytest.mark.anyio
    async def test_enum_filter_uses_upstream_literal(self, make_handler) -> None:
        handler = make_handler({("GET", "/api/vcenter/vm"): VMS[:1]})
        params = VMFilter(power_states=[PowerState.POWERED_ON, PowerState.SUSPENDED])
        async with _client(handler) as client:
            await client.get_vms(params)

        (request,) = handler.calls("GET", "/api/vcenter/vm")
        assert request.url.query.decode() == "power_states=POWERED_ON,SUSPENDED"

    @pytest.mark.anyio
    async def test_folder_type_is_single_valued(self, make_handler) -> None:
        handler = make_handler({("GET", "/api/vcenter/folder"): []})
        async with _client(handler) as client:
            await client.get_folders(FolderFilter(type=FolderType.HOST))

        (request,) = handler.calls("GET", "/api/vcenter/folder")
        assert request.url.query.decode() == "type=HOST"

    @pytest.mark.anyio
    async def test_standalone_flag(self, make_handler) -> None:
        handler = make_handler({("GET", "/api/vcenter/host"): []})
        async with _client(handler) as client:
            await client.get_hosts(HostFilter(standalone=False, names=["esx 1"]))

        (request,) = handler.calls("GET", "/api/vcenter/host")
        assert request.url.query.decode() == "names=esx%201&standalone=false"

    @pytest.mark.anyio
    async def test_unknown_fields_are_kept(self, make_handler) -> None:
        body = [{"cluster": "domain-c8", "name": "prod", "vendor_field": {"x": 1}}]
        handler = make_handler({("GET", "/api/vcenter/cluster"): body})
        async with _client(handler) as client:
            (cluster,) = await client.get_clusters(ClusterFilter(names=["prod"]))

        assert cluster.name == "prod"
        assert cluster.to_dict() == body[0]

    @pytest.mark.anyio
    async def test_deployment_object_is_wrapped(self, make_handler) -> None:
        body = {"state": "CONFIGURED", "operation": "INSTALL", "status": "SUCCEEDED"}
        handler = make_handler({("GET", "/api/vcenter/deployment"): body})
        async with _client(handler) as client:
            (deployment,) = await client.get_deployments()

        assert deployment.state == "CONFIGURED"
        assert deployment.status == "SUCCEEDED"


class TestErrors:
    """Tests for error propagation."""

    @pytest.mark.anyio
    async def test_server_error_raises_request_error(self, make_handler) -> None:
        handler = make_handler(
            {
                ("GET", "/api/vcenter/cluster"): lambda request: httpx.Response(
                    500, json={"error_type": "ERROR", "messages": [{"default_message": "boom"}]}
                )
            }
        )
        async with _client(handler) as client:
            with pytest.raises(RequestError) as exc_info:
                await client.get_clusters()

        assert exc_info.value.status_code == 500
        assert exc_info.value.resource == "Clusters"
        assert str(exc_info.value).startswith("Failed to get Clusters: HTTP 500")
        assert "boom" in str(exc_info.value)

    @pytest.mark.anyio
    async def test_expired_session_is_not_refreshed(self, make_handler) -> None:
        handler = make_handler(
            {("GET", "/api/vcenter/datacenter"): lambda request: httpx.Response(401)}
        )
        async with _client(handler) as client:
            with pytest.raises(RequestError) as exc_info:
                await client.get_datacenters()

        assert exc_info.value.status_code == 401
        assert exc_info.value.resource == "DataCenters"
        assert len(handler.calls("POST", "/api/session")) == 1

    @pytest.mark.anyio
    async def test_invalid_json_raises_decode_error(self, make_handler) -> None:
        handler = make_handler(
            {("GET", "/api/vcenter/network"): lambda request: httpx.Response(200, content=b"<html>")}
        )
        async with _client(handler) as client:
            with pytest.raises(DecodeError, match="Networks"):
                await client.get_networks()

    @pytest.mark.anyio
    async def test_non_list_body_raises_decode_error(self, make_handler) -> None:
        handler = make_handler({("GET", "/api/vcenter/datastore"): {"value": []}})
        async with _client(handler) as client:
            with pytest.raises(DecodeError):
                await client.get_datastores()

    @pytest.mark.anyio
    async def test_transport_error_raises_network_error(self, make_handler) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("reset", request=request)

        handler = make_handler({("GET", "/api/vcenter/host"): fail})
        async with _client(handler) as client:
            with pytest.raises(NetworkError):
                await client.get_hosts()


    @pytest.mark.anyio
    async def test_redirect_loop_raises_api_error(self, make_handler) -> None:
        def loop(request: httpx.Request) -> httpx.Response:
            raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=request)

        handler = make_handler({("GET", "/api/vcenter/vm"): loop})
        async with _client(handler) as client:
            with pytest.raises(APIError, match="VMs"):
                await client.get_vms()


class TestFromProfile:
    """Tests for building a client from a stored profile."""

    def test_profile_fields_are_used(self) -> None:
        profile = ProfileConfig(
            provider="vsphere",
            host=HOST,
            verify_ssl=False,
            timeout=10,
            auth=AuthConfig(type="basic", user="admin", password="pw"),
        )
        client = VSphereClient.from_profile(profile)

        assert client.base_url == f"https://{HOST}"
        assert client.verify_ssl is False
        assert client.timeout == 10
        assert client.auth_handler.user == "admin"
