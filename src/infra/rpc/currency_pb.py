"""currency.proto 메시지/서비스 정의

protoc 코드 생성 단계 없이 FileDescriptorProto를 직접 구성해 메시지 클래스를 만듭니다.
필드 번호와 타입은 proto/currency.proto 와 일치해야 합니다.
"""

from __future__ import annotations

from typing import Any, Final

import grpc
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE: Final[str] = "currency"
SERVICE_NAME: Final[str] = f"{PACKAGE}.Currency"
CONVERT_METHOD: Final[str] = f"/{SERVICE_NAME}/Convert"

_Field = descriptor_pb2.FieldDescriptorProto


def _add_field(
    message: descriptor_pb2.DescriptorProto, name: str, number: int, field_type: int
) -> None:
    message.field.add(
        name=name,
        number=number,
        type=field_type,
        label=_Field.LABEL_OPTIONAL,
        json_name=name,
    )


def build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="currency.proto", package=PACKAGE, syntax="proto3"
    )

    request = file_proto.message_type.add(name="CurrencyRequest")
    _add_field(request, "symbol", 1, _Field.TYPE_STRING)
    _add_field(request, "base", 2, _Field.TYPE_STRING)

    response = file_proto.message_type.add(name="CurrencyResponse")
    _add_field(response, "to", 1, _Field.TYPE_STRING)
    _add_field(response, "base", 2, _Field.TYPE_STRING)
    _add_field(response, "value", 3, _Field.TYPE_FLOAT)

    service = file_proto.service.add(name="Currency")
    service.method.add(
        name="Convert",
        input_type=f".{PACKAGE}.CurrencyRequest",
        output_type=f".{PACKAGE}.CurrencyResponse",
    )
    return file_proto


# 전역 기본 풀과 이름 충돌을 피하기 위해 전용 풀 사용
_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(build_file_descriptor().SerializeToString())

CurrencyRequest: Any = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName(f"{PACKAGE}.CurrencyRequest")
)
CurrencyResponse: Any = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName(f"{PACKAGE}.CurrencyResponse")
)


class CurrencyStub:
    """Currency 서비스 클라이언트 스텁"""

    def __init__(self, channel: grpc.Channel | grpc.aio.Channel) -> None:
        self.Convert = channel.unary_unary(
            CONVERT_METHOD,
            request_serializer=CurrencyRequest.SerializeToString,
            response_deserializer=CurrencyResponse.FromString,
        )


def add_currency_servicer_to_server(servicer: Any, server: grpc.aio.Server) -> None:
    """servicer.Convert 를 currency.Currency/Convert 로 등록"""
    rpc_method_handlers = {
        "Convert": grpc.unary_unary_rpc_method_handler(
            servicer.Convert,
            request_deserializer=CurrencyRequest.FromString,
            response_serializer=CurrencyResponse.SerializeToString,
        ),
    }
    generic_handler = grpc.method_handlers_generic_handler(SERVICE_NAME, rpc_method_handlers)
    server.add_generic_rpc_handlers((generic_handler,))
