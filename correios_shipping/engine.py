"""Correios rate computation: validate, fan out per service, aggregate."""

import logging
from concurrent.futures import ThreadPoolExecutor, wait

from correios_shipping.base_client import CarrierGateway
from correios_shipping.collaborators import (
    AddressService,
    CurrencyService,
    MeasureService,
    ShippingAggregator,
)
from correios_shipping.composer import QuoteComposer
from correios_shipping.currency import CarrierCurrency
from correios_shipping.errors import MESSAGES
from correios_shipping.models import (
    CarrierSettings,
    LineItem,
    ShipmentRequest,
    ShippingOption,
    ShippingOptionResponse,
)
from correios_shipping.request_builder import RateRequest, RateRequestBuilder
from correios_shipping.services import service_name_from_code
from correios_shipping.tracking import CorreiosShipmentTracker
from correios_shipping.validation import ServiceOutcome, validate

logger = logging.getLogger(__name__)


def validate_request(request: ShipmentRequest, response: ShippingOptionResponse) -> bool:
    """Record every missing piece of *request* on *response*.

    Returns True when the request is complete.
    """
    if not request.items:
        response.add_error(MESSAGES["no_shipment_items"])
    address = request.shipping_address
    if address is None:
        response.add_error(MESSAGES["address_not_set"])
    if address is None or address.country_id is None:
        response.add_error(MESSAGES["country_not_set"])
    if address is None or address.state_province_id is None:
        response.add_error(MESSAGES["state_not_set"])
    if address is None or not address.zip_postal_code:
        response.add_error(MESSAGES["postal_code_not_set"])
    return response.success


class RateComputationEngine:
    """
    Quotes a shipment against every enabled Correios service.

    Flow:
    1. Validate the request; an incomplete one returns its errors only
    2. Build one rate request per enabled service code
    3. Call the carrier for every service concurrently, bounded by
       ``settings.request_timeout``
    4. Validate and price each answer; failed services are logged and left out
    5. Fall back to the configured default rate when nothing was quoted
    """

    def __init__(
        self,
        settings: CarrierSettings,
        gateway: CarrierGateway,
        measure_service: MeasureService,
        aggregator: ShippingAggregator,
        address_service: AddressService,
        currency_service: CurrencyService,
    ):
        self.settings = settings
        self.gateway = gateway
        self.measure_service = measure_service
        self.aggregator = aggregator
        self.address_service = address_service
        self.currency = CarrierCurrency(currency_service)
        self.shipment_tracker = CorreiosShipmentTracker()

    @classmethod
    def for_store(cls, settings: CarrierSettings, gateway: CarrierGateway, store) -> "RateComputationEngine":
        """Build an engine from a store object implementing every collaborator."""
        return cls(settings, gateway, store, store, store, store)

    def _builder(self, settings: CarrierSettings) -> RateRequestBuilder:
        return RateRequestBuilder(
            settings, self.measure_service, self.aggregator, self.address_service, self.currency,
        )

    def get_shipping_options(
        self,
        request: ShipmentRequest,
        settings: CarrierSettings | None = None,
    ) -> ShippingOptionResponse:
        """Return shipping options for *request*.

        Carrier-side failures never raise; they only shrink the option list.

        Raises:
            ValueError: *request* is None.
            ConfigurationError: the store lacks the carrier's units or currency.
        """
        if request is None:
            raise ValueError("request is required")
        settings = settings or self.settings

        response = ShippingOptionResponse()
        if not validate_request(request, response):
            return response

        rate_requests = self._builder(settings).build(request)
        composer = QuoteComposer(settings, self.currency)

        for outcome in self._fan_out(rate_requests, settings.request_timeout):
            option = self._compose(composer, outcome)
            if option is not None:
                response.shipping_options.append(option)

        fallback = composer.fallback(response.shipping_options)
        if fallback is not None:
            logger.info("No Correios service quoted, using default rate %s", fallback.rate)
            response.shipping_options.append(fallback)

        return response

    def hide_shipment_methods(self, items: list[LineItem], settings: CarrierSettings | None = None) -> bool:
        """Return True when Correios should not be offered for *items*."""
        if not items:
            return False
        return self._builder(settings or self.settings).deny_product_shipping(items)

    def _quote_service(self, rate_request: RateRequest) -> ServiceOutcome:
        code = rate_request.service_code
        logger.debug("Requesting Correios quote for service %s", code)
        try:
            raw = self.gateway.quote(**rate_request.as_kwargs())
        except Exception as exc:
            logger.debug("Correios request for service %s raised", code, exc_info=True)
            return ServiceOutcome.failed(code, f"Carrier request failed: {exc}")
        if raw is None:
            return ServiceOutcome.failed(code, "Carrier returned no result")
        try:
            return validate(raw)
        except Exception as exc:
            logger.debug("Correios result for service %s could not be read", code, exc_info=True)
            return ServiceOutcome.failed(code, f"Unreadable carrier result: {exc}")

    def _fan_out(self, rate_requests: list[RateRequest], timeout: float) -> list[ServiceOutcome]:
        """Quote every service, keeping the order of *rate_requests*."""
        if not rate_requests:
            return []

        executor = ThreadPoolExecutor(
            max_workers=len(rate_requests),
            thread_name_prefix="correios-quote",
        )
        try:
            futures = [(r.service_code, executor.submit(self._quote_service, r)) for r in rate_requests]
            wait([f for _, f in futures], timeout=timeout)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        outcomes = []
        for code, future in futures:
            if future.cancelled() or not future.done():
                outcomes.append(ServiceOutcome.failed(code, f"Carrier request timed out after {timeout}s"))
                continue
            outcomes.append(future.result())
        return outcomes

    def _compose(self, composer: QuoteComposer, outcome: ServiceOutcome) -> ShippingOption | None:
        if not outcome.ok:
            logger.error("Correios service %s skipped: %s", outcome.service_code, outcome.error.message)
            return None
        try:
            service_name = service_name_from_code(outcome.service_code)
        except ValueError as exc:
            logger.error("Correios service %s skipped: %s", outcome.service_code, exc)
            return None
        if outcome.observation:
            logger.warning("Correios service %s: %s", outcome.service_code, outcome.observation)
        try:
            return composer.compose(outcome.price, service_name, outcome.lead_time, outcome.observation)
        except Exception:
            logger.error("Correios service %s could not be priced", outcome.service_code, exc_info=True)
            return None
