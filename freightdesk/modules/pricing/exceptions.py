"""Pricing errors."""


class PricingError(ValueError):
    """Raised for amounts or ratios the pricing engine cannot apply."""
