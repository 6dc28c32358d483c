"""
Pocket Bank

An interactive multi-currency teller: in-memory accounts held in Philippine
Pesos, deposits and withdrawals in any supported currency, exchange quotes,
exchange-rate recording and daily interest projection.
"""

__version__ = "1.0.0"
