from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

import grpc
from grpc_health.v1 import health_pb2, health_pb2_grpc

from src.infra.rpc.currency_pb import SERVICE_NAME, CurrencyRequest, CurrencyStub


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Call currency.Currency/Convert and grpc.health.v1.Health/Check",
    )
    parser.add_argument("--symbol", required=True, help="target currency code e.g. EUR")
    parser.add_argument(
        "--base",
        default="",
        help="base currency code (default: server's configured base)",
    )
    parser.add_argument(
        "--target",
        default="localhost:8001",
        help="server address (default: localhost:8001)",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="stream health status changes after the conversion",
    )
    return parser.parse_args(argv)


async def run() -> None:
    args = parse_args()

    async with grpc.aio.insecure_channel(args.target) as channel:
        health_stub = health_pb2_grpc.HealthStub(channel)
        check = await health_stub.Check(health_pb2.HealthCheckRequest(service=SERVICE_NAME))
        print(f"health: {health_pb2.HealthCheckResponse.ServingStatus.Name(check.status)}")

        try:
            response = await CurrencyStub(channel).Convert(
                CurrencyRequest(symbol=args.symbol, base=args.base)
            )
        except grpc.aio.AioRpcError as e:
            print(f"Convert failed: {e.code().name} {e.details()}")
        else:
            print(f"1 {response.base} = {response.value} {response.to}")

        if args.watch:
            request = health_pb2.HealthCheckRequest(service=SERVICE_NAME)
            async for update in health_stub.Watch(request):
                print(
                    "health: "
                    f"{health_pb2.HealthCheckResponse.ServingStatus.Name(update.status)}"
                )


if __name__ == "__main__":
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        pass
