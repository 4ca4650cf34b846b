"""Test fixtures for the swiper.

This package provides reusable test fixtures:
- swiper: Engine factories, item stacks and an event recorder
- api: TestClient and the engine injected into the API
"""
