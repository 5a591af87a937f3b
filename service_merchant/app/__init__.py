"""
Merchant API client package.

Domain calls never talk HTTP or handle credentials themselves: they hand a
request builder to the dispatcher, which owns credential refresh, the single
credential retry and error classification.

Structure:
- app.main: MerchantAPI facade wiring everything from settings.
- app.domain: Credential, DomainRequest, ApiResult and the errcode table.
- app.credentials: Credential store, refresh gate, persistence hooks.
- app.adapters: Token endpoint client and request invoker (httpx).
- app.dispatch: Dispatcher with the one-retry state machine.
- app.groups: Shop group operations.
"""
