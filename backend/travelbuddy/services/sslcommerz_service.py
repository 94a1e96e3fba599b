"""
SSLCommerz payment gateway client.

The payment service only talks to the gateway through the PaymentGatewayClient
interface; this module provides the HTTP implementation.
"""
import logging
from typing import Any, Dict, Optional, Protocol
import httpx
from travelbuddy.core.config import settings
from travelbuddy.core.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)


class PaymentGatewayClient(Protocol):
    """Opaque external payment gateway."""

    def init_payment(
        self,
        transaction_id: str,
        amount: float,
        customer: Dict[str, str],
        product_name: str
    ) -> Dict[str, Any]:
        ...

    def validate_payment(self, callback_data: Dict[str, Any]) -> Dict[str, Any]:
        ...


class SSLCommerzGateway:
    """HTTP client for SSLCommerz session init and payment validation."""

    def __init__(self, timeout: Optional[float] = None, transport: Optional[httpx.BaseTransport] = None):
        self.timeout = timeout or settings.PAYMENT_TIMEOUT_SECONDS
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self.transport)

    def init_payment(
        self,
        transaction_id: str,
        amount: float,
        customer: Dict[str, str],
        product_name: str
    ) -> Dict[str, Any]:
        """Open a gateway session; the response carries GatewayPageURL."""
        form = {
            "store_id": settings.SSL_STORE_ID,
            "store_passwd": settings.SSL_STORE_PASS,
            "total_amount": str(amount),
            "currency": settings.PAYMENT_CURRENCY,
            "tran_id": transaction_id,
            "success_url": f"{settings.SSL_SUCCESS_BACKEND_URL}?transactionId={transaction_id}",
            "fail_url": f"{settings.SSL_FAIL_BACKEND_URL}?transactionId={transaction_id}",
            "cancel_url": f"{settings.SSL_CANCEL_BACKEND_URL}?transactionId={transaction_id}",
            "ipn_url": settings.SSL_IPN_URL,
            "shipping_method": "N/A",
            "product_name": product_name,
            "product_category": "Service",
            "product_profile": "general",
            "cus_name": customer.get("name", "N/A"),
            "cus_email": customer.get("email", "N/A"),
            "cus_add1": customer.get("address", "N/A"),
            "cus_phone": customer.get("phone_number", "N/A"),
            "cus_city": "Dhaka",
            "cus_country": "Bangladesh",
        }

        try:
            with self._client() as client:
                response = client.post(settings.SSL_PAYMENT_API, data=form)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"SSLCommerz init failed: {e.response.status_code} - {e.response.text}")
            raise PaymentGatewayError(f"Payment gateway error: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"SSLCommerz init network error: {e}", exc_info=True)
            raise PaymentGatewayError(f"Payment gateway unreachable: {e}") from e

        if data.get("status") != "SUCCESS":
            reason = data.get("failedreason", "Unknown error")
            logger.error(f"SSLCommerz refused session for {transaction_id}: {reason}")
            raise PaymentGatewayError(f"Payment gateway error: {reason}")

        logger.info(f"SSLCommerz session opened for {transaction_id}")
        return data

    def validate_payment(self, callback_data: Dict[str, Any]) -> Dict[str, Any]:
        """Confirm a callback with the validation API using its val_id."""
        val_id = callback_data.get("val_id")
        if not val_id:
            raise PaymentGatewayError("Payment Validation Error: missing val_id")

        params = {
            "val_id": val_id,
            "store_id": settings.SSL_STORE_ID,
            "store_passwd": settings.SSL_STORE_PASS,
            "v": 1,
            "format": "json",
        }
        try:
            with self._client() as client:
                response = client.get(settings.SSL_VALIDATION_API, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"SSLCommerz validation failed for val_id {val_id}: {e}", exc_info=True)
            raise PaymentGatewayError(f"Payment Validation Error: {e}") from e

        if data.get("status") not in ("VALID", "VALIDATED"):
            raise PaymentGatewayError(f"Payment Validation Error: status {data.get('status')}")
        return data


def get_payment_gateway() -> PaymentGatewayClient:
    """Dependency returning the configured gateway."""
    return SSLCommerzGateway()
