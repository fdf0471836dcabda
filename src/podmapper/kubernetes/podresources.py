# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Client for the kubelet pod-resources gRPC service.

Only the `PodResourcesLister/List` call is used. Its messages are defined here
with a protobuf FileDescriptorProto rather than generated stubs; both the
`v1alpha1` and `v1` packages share the subset of fields read by podmapper.
"""

from dataclasses import dataclass
from functools import cache
from pathlib import Path

import grpc
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import Message

from podmapper.common.enums import PodResourcesAPIVersion
from podmapper.common.environment import Environment
from podmapper.common.exceptions import (
    PodResourcesConnectionError,
    PodResourcesListError,
)
from podmapper.common.mixins import LoggerMixin
from podmapper.common.models import (
    ContainerDevices,
    ContainerResources,
    PodResources,
    PodResourcesSnapshot,
)

__all__ = [
    "PodResourcesClient",
    "PodResourcesMessages",
    "get_pod_resources_messages",
    "snapshot_from_proto",
]

_FIELD = descriptor_pb2.FieldDescriptorProto


@dataclass(frozen=True)
class PodResourcesMessages:
    """Message classes and method path for one pod-resources API version."""

    service_name: str
    list_request: type[Message]
    list_response: type[Message]
    pod_resources: type[Message]
    container_resources: type[Message]
    container_devices: type[Message]

    @property
    def list_method(self) -> str:
        return f"/{self.service_name}/List"


def _add_message(
    file_proto: descriptor_pb2.FileDescriptorProto,
    name: str,
    fields: list[tuple[str, int, int, str | None]],
) -> None:
    message = file_proto.message_type.add(name=name)
    for field_name, number, label, type_name in fields:
        field = message.field.add(name=field_name, number=number, label=label)
        if type_name is None:
            field.type = _FIELD.TYPE_STRING
        else:
            field.type = _FIELD.TYPE_MESSAGE
            field.type_name = f".{file_proto.package}.{type_name}"


@cache
def get_pod_resources_messages(
    api_version: PodResourcesAPIVersion,
) -> PodResourcesMessages:
    """Build (once) the message classes for `api_version`."""
    package = str(api_version)
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=f"podmapper/podresources/{package}/api.proto",
        package=package,
        syntax="proto3",
    )
    optional, repeated = _FIELD.LABEL_OPTIONAL, _FIELD.LABEL_REPEATED

    _add_message(file_proto, "ListPodResourcesRequest", [])
    _add_message(
        file_proto,
        "ListPodResourcesResponse",
        [("pod_resources", 1, repeated, "PodResources")],
    )
    _add_message(
        file_proto,
        "PodResources",
        [
            ("name", 1, optional, None),
            ("namespace", 2, optional, None),
            ("containers", 3, repeated, "ContainerResources"),
        ],
    )
    _add_message(
        file_proto,
        "ContainerResources",
        [
            ("name", 1, optional, None),
            ("devices", 2, repeated, "ContainerDevices"),
        ],
    )
    _add_message(
        file_proto,
        "ContainerDevices",
        [
            ("resource_name", 1, optional, None),
            ("device_ids", 2, repeated, None),
        ],
    )

    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(file_proto.SerializeToString())

    def message_class(name: str) -> type[Message]:
        return message_factory.GetMessageClass(
            pool.FindMessageTypeByName(f"{package}.{name}")
        )

    return PodResourcesMessages(
        service_name=f"{package}.PodResourcesLister",
        list_request=message_class("ListPodResourcesRequest"),
        list_response=message_class("ListPodResourcesResponse"),
        pod_resources=message_class("PodResources"),
        container_resources=message_class("ContainerResources"),
        container_devices=message_class("ContainerDevices"),
    )


def snapshot_from_proto(response: Message) -> PodResourcesSnapshot:
    """Convert a ListPodResourcesResponse into a PodResourcesSnapshot."""
    return PodResourcesSnapshot(
        pod_resources=[
            PodResources(
                name=pod.name,
                namespace=pod.namespace,
                containers=[
                    ContainerResources(
                        name=container.name,
                        devices=[
                            ContainerDevices(
                                resource_name=device.resource_name,
                                device_ids=list(device.device_ids),
                            )
                            for device in container.devices
                        ],
                    )
                    for container in pod.containers
                ],
            )
            for pod in response.pod_resources
        ]
    )


class PodResourcesClient(LoggerMixin):
    """Lists the devices assigned to containers through the kubelet socket.

    Both the connection and the List call are bounded by `timeout`. Nothing is
    retried; failures surface as PodResourcesError subclasses.

    Example:
        with PodResourcesClient("/var/lib/kubelet/pod-resources/kubelet.sock") as client:
            snapshot = client.list_pods()

    Args:
        socket_path: Path of the kubelet pod-resources unix socket.
        api_version: Pod-resources API version served by the kubelet.
        timeout: Seconds to wait for the connection and for the List call
            (default: from Environment).
    """

    def __init__(
        self,
        socket_path: str | Path,
        api_version: PodResourcesAPIVersion = PodResourcesAPIVersion.V1ALPHA1,
        timeout: float | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.socket_path = Path(socket_path)
        self.api_version = api_version
        self.timeout = timeout or Environment.KUBERNETES.CONNECTION_TIMEOUT
        self._messages = get_pod_resources_messages(api_version)
        self._channel: grpc.Channel | None = None

    @property
    def target(self) -> str:
        if self.socket_path.is_absolute():
            return f"unix://{self.socket_path}"
        return f"unix:{self.socket_path}"

    def connect(self) -> None:
        """Open the channel and wait until it is ready.

        Raises:
            PodResourcesConnectionError: If the channel is not ready within the timeout.
        """
        if self._channel is not None:
            return

        self.debug(lambda: f"Connecting to pod-resources service at {self.target}")
        channel = grpc.insecure_channel(self.target)
        try:
            grpc.channel_ready_future(channel).result(timeout=self.timeout)
        except grpc.FutureTimeoutError as e:
            channel.close()
            raise PodResourcesConnectionError(
                str(self.socket_path),
                f"not ready after {self.timeout} seconds",
            ) from e
        self._channel = channel

    def list_pods(self) -> PodResourcesSnapshot:
        """Call List and return the devices assigned to every container.

        Raises:
            PodResourcesListError: If the call fails or exceeds the timeout.
        """
        if self._channel is None:
            self.connect()

        list_call = self._channel.unary_unary(
            self._messages.list_method,
            request_serializer=self._messages.list_request.SerializeToString,
            response_deserializer=self._messages.list_response.FromString,
        )
        try:
            response = list_call(self._messages.list_request(), timeout=self.timeout)
        except grpc.RpcError as e:
            raise PodResourcesListError(repr(e)) from e

        snapshot = snapshot_from_proto(response)
        self.trace(lambda: f"Pod resources: {snapshot}")
        return snapshot

    def close(self) -> None:
        if self._channel is not None:
            self._channel.close()
            self._channel = None

    def __enter__(self) -> "PodResourcesClient":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
