"""
============================

Exchange Adapters.

============================

This package contains adapter implementations for cryptocurrency exchanges.
Adapters talk to exchange REST APIs, translate exchange-specific payloads
into domain models and implement the ExchangeAPI protocol.

"""
