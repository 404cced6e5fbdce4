"""Cut-down compute v2 service used as a test fixture."""

from __future__ import annotations

from typing import Any, Iterator

from opencloud.common.api import AbstractApi
from opencloud.common.resource import AbstractResource
from opencloud.common.service import AbstractService


class Api(AbstractApi):
    def __init__(self) -> None:
        self.server_id = {"type": "string", "location": "url", "required": True}

    def get_server(self) -> dict[str, Any]:
        return {
            "method": "GET",
            "path": "servers/{id}",
            "params": {"id": self.server_id},
        }

    def get_servers(self) -> dict[str, Any]:
        return {
            "method": "GET",
            "path": "servers",
            "params": {
                "limit": self.query({"type": "integer"}),
                "marker": self.query({"type": "string"}),
                "name": self.query({"type": "string"}),
            },
        }

    def post_server(self) -> dict[str, Any]:
        return {
            "method": "POST",
            "path": "servers",
            "jsonKey": "server",
            "params": {
                "name": self.is_required({"type": "string"}),
                "imageId": {"type": "string", "sentAs": "imageRef", "required": True},
                "flavorId": {"type": "string", "sentAs": "flavorRef"},
                "metadata": {"type": "object"},
            },
        }

    def put_server_metadata(self) -> dict[str, Any]:
        return {
            "method": "PUT",
            "path": "servers/{id}/metadata",
            "params": {
                "id": self.server_id,
                "metadata": {"type": "object", "location": "header", "prefix": "X-Server-Meta-"},
            },
        }


class Server(AbstractResource):
    resource_key = "server"
    resources_key = "servers"
    marker_key = "id"
    aliases = {"OS-EXT-STS:task_state": "task_state"}

    id: str
    name: str
    status: str
    access_ipv4: str
    task_state: str
    flavor: dict
    image: dict

    def retrieve(self) -> None:
        response = self.execute(self.api.get_server(), {"id": self.id})
        self.populate_from_response(response)


class Service(AbstractService):
    def get_server(self, server_id: str) -> Server:
        return self.model(Server, {"id": server_id})

    def list_servers(self, **options: Any) -> Iterator[Server]:
        return self.model(Server).enumerate(self.api.get_servers(), options)

    def create_server(self, **options: Any) -> Server:
        response = self.execute(self.api.post_server(), options)
        return self.model(Server, response)
