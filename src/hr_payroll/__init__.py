"""HR Payroll package.

Feature modules (employees, attendance, payroll) each expose a plain domain
model, a repository protocol with a MySQL implementation, and a service layer.
Flask controllers stay thin and only translate domain errors into responses.
"""
