from nostrlisting.pricing.total_cost import CostCalculator, calculate_total_cost

__all__ = ["CostCalculator", "calculate_total_cost"]
