"""Organization hierarchy aggregation and audit-logging core"""
