"""Station HR package.

HR core for a fuel station with a shop: shift-schedule resolution from
rotation patterns plus exceptions, and cash-reconciliation ("arqueo")
allocation across the employees who worked each shift.

Organized by feature modules (schedules, reconciliation, ...) with a thin
Flask controller layer over service/repository layers.
"""
