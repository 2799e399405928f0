from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from ethwatch.config import settings
from ethwatch.models.request import SubscribeRequest
from ethwatch.models.response import (
    LatestBlock,
    ScanResult,
    SubscribeResponse,
    SubscriptionList,
    SubscriptionScanResult,
)
from ethwatch.services.base import SubscriberStore
from ethwatch.services.scanner import Scanner
from ethwatch.utils.address import validate_evm_address
from ethwatch.utils.errors import ChainClientError, error_response

logger = logging.getLogger("routes.watch")

router = APIRouter(prefix="/v1")


def get_registry(request: Request) -> SubscriberStore:
    return request.app.state.registry


def get_scanner(request: Request) -> Scanner:
    return request.app.state.scanner


Blocks = Annotated[
    int | None,
    Query(
        ge=1,
        le=settings.max_block_range,
        description="Number of trailing blocks to scan, newest first",
    ),
]


@router.get("/blocks/latest", response_model=LatestBlock)
async def latest_block(scanner: Scanner = Depends(get_scanner)):
    try:
        height = await scanner.current_height()
    except ChainClientError as e:
        logger.error(f"502 Failed to get current block: {e}")
        return error_response(502, f"Failed to get current block: {e}")
    return LatestBlock(block_number=height, block_number_hex=hex(height))


@router.post("/subscriptions", response_model=SubscribeResponse)
async def subscribe(
    body: SubscribeRequest,
    response: Response,
    registry: SubscriberStore = Depends(get_registry),
):
    address = body.address.strip()
    if settings.validate_addresses and not validate_evm_address(address):
        logger.warning(f"400 Invalid address: '{address}'")
        return error_response(400, f"Invalid address: '{address}'")

    added = registry.subscribe(address)
    if added:
        response.status_code = 201
    else:
        logger.info(f"Address {address} is already subscribed")
    return SubscribeResponse(address=address, subscribed=added)


@router.get("/subscriptions", response_model=SubscriptionList)
async def list_subscriptions(registry: SubscriberStore = Depends(get_registry)):
    addresses = registry.list_subscribed()
    return SubscriptionList(addresses=addresses, count=len(addresses))


@router.get("/transactions", response_model=SubscriptionScanResult)
async def subscribed_transactions(
    blocks: Blocks = None,
    scanner: Scanner = Depends(get_scanner),
):
    """Scan the trailing window once for every subscribed address."""
    range_size = blocks if blocks is not None else settings.default_block_range
    try:
        result = await scanner.scan_subscribed(range_size)
    except ChainClientError as e:
        logger.error(f"502 Scan of subscribed addresses failed: {e}")
        return error_response(502, f"Failed to resolve current block: {e}")
    return result


@router.get("/transactions/{address}", response_model=ScanResult)
async def address_transactions(
    address: str,
    blocks: Blocks = None,
    scanner: Scanner = Depends(get_scanner),
):
    range_size = blocks if blocks is not None else settings.default_block_range
    logger.info(f"Resolved params: address={address}, blocks={range_size}")
    try:
        result = await scanner.scan(address, range_size)
    except ChainClientError as e:
        logger.error(f"502 Scan of {address} failed: {e}")
        return error_response(502, f"Failed to resolve current block: {e}")

    if not result.transactions:
        logger.info(f"No transactions found for address {address}")
    return result
