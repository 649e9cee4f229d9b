"""Storefront domain services: cart, pricing, checkout, order status."""
