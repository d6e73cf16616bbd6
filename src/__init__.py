"""
Repair Scheduling Service.

Technician matching, appointment scheduling and cancellation for device repairs.
"""

__version__ = "0.1.0"
__description__ = "Repair Scheduling Service"
