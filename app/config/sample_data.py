"""
Sample data for demos and local development.
Schemas, users and standing policies seeded by app/scripts/seed_sample_data.py.
"""

SAMPLE_USERS = [
    {"id": "sample-sales-user", "email": "sales_user@example.com", "role": "user"},
    {"id": "sample-finance-user", "email": "finance_user@example.com", "role": "user"},
    {"id": "sample-hr-user", "email": "hr_user@example.com", "role": "user"},
    {"id": "sample-manager", "email": "manager@example.com", "role": "user"},
]

SAMPLE_SCHEMAS = [
    {
        "name": "Sales",
        "description": "Sales department database schema",
        "tables": [
            {
                "name": "Customers",
                "description": "Customer information table",
                "fields": [
                    {"name": "customer_id", "data_type": "integer", "description": "Primary key"},
                    {"name": "name", "data_type": "text", "description": "Customer full name"},
                    {"name": "email", "data_type": "text", "description": "Customer email address"},
                    {"name": "phone", "data_type": "text", "description": "Customer phone number"},
                    {"name": "address", "data_type": "text", "description": "Customer address"},
                    {"name": "created_at", "data_type": "timestamp", "description": "Record creation date"},
                ],
            },
            {
                "name": "Orders",
                "description": "Customer orders data",
                "fields": [
                    {"name": "order_id", "data_type": "integer", "description": "Primary key"},
                    {"name": "customer_id", "data_type": "integer", "description": "Foreign key to Customers"},
                    {"name": "order_date", "data_type": "date", "description": "Date of order"},
                    {"name": "total_amount", "data_type": "decimal", "description": "Total order amount"},
                    {"name": "status", "data_type": "text", "description": "Order status"},
                    {"name": "payment_method", "data_type": "text", "description": "Payment method used"},
                ],
            },
            {
                "name": "Products",
                "description": "Product catalog",
                "fields": [
                    {"name": "product_id", "data_type": "integer", "description": "Primary key"},
                    {"name": "name", "data_type": "text", "description": "Product name"},
                    {"name": "description", "data_type": "text", "description": "Product description"},
                    {"name": "price", "data_type": "decimal", "description": "Product price"},
                    {"name": "category", "data_type": "text", "description": "Product category"},
                    {"name": "stock_quantity", "data_type": "integer", "description": "Available stock"},
                ],
            },
        ],
    },
    {
        "name": "Finance",
        "description": "Financial department database schema",
        "tables": [
            {
                "name": "Invoices",
                "description": "Customer invoices",
                "fields": [
                    {"name": "invoice_id", "data_type": "integer", "description": "Primary key"},
                    {"name": "order_id", "data_type": "integer", "description": "Foreign key to Orders"},
                    {"name": "amount", "data_type": "decimal", "description": "Invoice amount"},
                    {"name": "issued_date", "data_type": "date", "description": "Date invoice was issued"},
                    {"name": "due_date", "data_type": "date", "description": "Invoice due date"},
                    {"name": "status", "data_type": "text", "description": "Payment status"},
                ],
            },
            {
                "name": "Expenses",
                "description": "Company expenses",
                "fields": [
                    {"name": "expense_id", "data_type": "integer", "description": "Primary key"},
                    {"name": "category", "data_type": "text", "description": "Expense category"},
                    {"name": "amount", "data_type": "decimal", "description": "Expense amount"},
                    {"name": "date", "data_type": "date", "description": "Date of expense"},
                    {"name": "department", "data_type": "text", "description": "Department responsible"},
                    {"name": "description", "data_type": "text", "description": "Expense description"},
                ],
            },
        ],
    },
    {
        "name": "HR",
        "description": "Human resources database schema",
        "tables": [
            {
                "name": "Employees",
                "description": "Employee information",
                "fields": [
                    {"name": "employee_id", "data_type": "integer", "description": "Primary key"},
                    {"name": "name", "data_type": "text", "description": "Employee full name"},
                    {"name": "position", "data_type": "text", "description": "Job position"},
                    {"name": "department", "data_type": "text", "description": "Department"},
                    {"name": "salary", "data_type": "decimal", "description": "Employee salary"},
                    {"name": "hire_date", "data_type": "date", "description": "Date employee was hired"},
                    {"name": "email", "data_type": "text", "description": "Employee email"},
                    {"name": "phone", "data_type": "text", "description": "Employee phone number"},
                ],
            },
            {
                "name": "Departments",
                "description": "Company departments",
                "fields": [
                    {"name": "department_id", "data_type": "integer", "description": "Primary key"},
                    {"name": "name", "data_type": "text", "description": "Department name"},
                    {"name": "manager_id", "data_type": "integer", "description": "Department manager employee ID"},
                    {"name": "budget", "data_type": "decimal", "description": "Department annual budget"},
                    {"name": "location", "data_type": "text", "description": "Department location"},
                ],
            },
            {
                "name": "Leave_Requests",
                "description": "Employee leave requests",
                "fields": [
                    {"name": "request_id", "data_type": "integer", "description": "Primary key"},
                    {"name": "employee_id", "data_type": "integer", "description": "Foreign key to Employees"},
                    {"name": "start_date", "data_type": "date", "description": "Leave start date"},
                    {"name": "end_date", "data_type": "date", "description": "Leave end date"},
                    {"name": "status", "data_type": "text", "description": "Request status"},
                    {"name": "type", "data_type": "text", "description": "Leave type"},
                    {"name": "reason", "data_type": "text", "description": "Reason for leave"},
                ],
            },
        ],
    },
]

# (user email, schema, table, effect, fields). fields=None is not field-scoped;
# a list of names is an explicit subset; "all_but:<name>" expands to every field except <name>.
SAMPLE_POLICIES = [
    ("sales_user@example.com", "Sales", "Customers", "allow", None),
    ("sales_user@example.com", "Sales", "Orders", "allow", None),
    ("sales_user@example.com", "Sales", "Products", "allow", None),
    ("finance_user@example.com", "Sales", "Orders", "allow",
     ["order_id", "customer_id", "order_date", "total_amount"]),
    ("finance_user@example.com", "Finance", "Invoices", "allow", None),
    ("finance_user@example.com", "Finance", "Expenses", "allow", None),
    ("hr_user@example.com", "HR", "Employees", "allow", None),
    ("hr_user@example.com", "HR", "Departments", "allow", None),
    ("hr_user@example.com", "HR", "Leave_Requests", "allow", None),
    ("manager@example.com", "HR", "Employees", "allow", "all_but:salary"),
    ("manager@example.com", "HR", "Leave_Requests", "allow", None),
]
