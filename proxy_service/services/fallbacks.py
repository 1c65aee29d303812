"""
Fallback Providers
Static data served in place of a live backend answer on selected read routes
"""

from typing import Any, Dict, FrozenSet, List, Mapping, Optional

FALLBACK_HEADER = "X-Fallback-Data"

_EPOCH = "2024-01-01T00:00:00Z"
_SEEDED = "2024-01-15T10:00:00Z"


class FallbackProvider:
    """
    Supplies the payload a read route returns when the backend is
    unreachable or answers with a non-2xx status.

    A payload of None means the requested record is unknown; the route
    answers 404 instead. Statuses in `relay_statuses` are passed through
    from the backend rather than replaced.
    """

    name = "fallback"
    relay_statuses: FrozenSet[int] = frozenset()

    def payload(self, path_params: Mapping[str, Any],
                query: Optional[Mapping[str, str]] = None) -> Any:
        raise NotImplementedError


class StaticFallback(FallbackProvider):
    """Fixed list of records, independent of the request"""

    def __init__(self, name: str, records: List[Dict[str, Any]]):
        self.name = name
        self._records = records

    def payload(self, path_params, query=None) -> List[Dict[str, Any]]:
        return [dict(record) for record in self._records]


def _page_value(query: Optional[Mapping[str, str]], key: str, default: int) -> int:
    try:
        return int((query or {}).get(key, default))
    except (TypeError, ValueError):
        return default


class PagedFallback(StaticFallback):
    """Fixed records wrapped in the backend's paginated envelope"""

    def payload(self, path_params, query=None) -> Dict[str, Any]:
        items = super().payload(path_params, query)
        return {
            "items": items,
            "total": len(items),
            "skip": _page_value(query, "skip", 0),
            "limit": _page_value(query, "limit", 100),
        }


class LookupFallback(StaticFallback):
    """One record from a fixed list, picked by the id path parameter"""

    def __init__(self, name: str, records: List[Dict[str, Any]],
                 param: str = "id", relay_statuses: FrozenSet[int] = frozenset()):
        super().__init__(name, records)
        self.param = param
        self.relay_statuses = relay_statuses

    def payload(self, path_params, query=None) -> Optional[Dict[str, Any]]:
        wanted = int(path_params[self.param])
        for record in self._records:
            if record["id"] == wanted:
                return dict(record)
        return None


def _branch(branch_id: int, name: str, code: str, address: str, phone: str) -> Dict[str, Any]:
    return {
        "id": branch_id,
        "branch_name": name,
        "branch_code": code,
        "address": address,
        "phone": phone,
        "status": True,
        "created_at": _EPOCH,
        "updated_at": _EPOCH,
    }


def _role(role_id: int, name: str, slug: str, description: str) -> Dict[str, Any]:
    return {
        "id": role_id,
        "name": name,
        "slug": slug,
        "description": description,
        "status": True,
        "created_at": _EPOCH,
        "updated_at": _EPOCH,
    }


BRANCHES_FALLBACK = StaticFallback("branches", [
    _branch(1, "Main Warehouse - Dubai", "DXB", "Dubai Industrial Area", "+971-4-1234567"),
    _branch(2, "Branch 1 - Abu Dhabi", "AUH", "Abu Dhabi Industrial City", "+971-2-1234567"),
    _branch(3, "Branch 2 - Sharjah", "SHJ", "Sharjah Industrial Area", "+971-6-1234567"),
    _branch(4, "Branch 3 - Ajman", "AJM", "Ajman Free Zone", "+971-6-7654321"),
])

ROLES_FALLBACK = StaticFallback("roles", [
    _role(1, "Administrator", "administrator", "Full system access with all permissions"),
    _role(2, "Manager", "manager", "Management level access with most permissions"),
    _role(3, "Staff", "staff", "Standard staff access with limited permissions"),
    _role(4, "Sales Representative", "sales-representative",
          "Sales focused access with customer and order permissions"),
    _role(5, "Accountant", "accountant", "Financial access with invoice and reporting permissions"),
])


# Customers

_CUSTOMER_STAMP = "2026-01-28T06:17:15"


def _customer(customer_id: int, code: str, full_name: str, phone: str,
              business_name: Optional[str], business_number: Optional[str],
              total_purchase: str, outstanding_balance: str, address: str, notes: str) -> Dict[str, Any]:
    return {
        "id": customer_id,
        "customer_code": code,
        "full_name": full_name,
        "phone": phone,
        "business_name": business_name,
        "business_number": business_number,
        "total_purchase": total_purchase,
        "outstanding_balance": outstanding_balance,
        "address": address,
        "notes": notes,
        "status": True,
        "created_at": _CUSTOMER_STAMP,
        "updated_at": _CUSTOMER_STAMP,
    }


CUSTOMER_RECORDS = [
    _customer(1, "CUST-001", "John Doe", "+971 50 123 4567", "AutoFix Ltd.", "123456789",
              "1250.75", "0.00", "Al Quoz Industrial Area, Dubai, UAE",
              "Regular customer, good payment history"),
    _customer(2, "CUST-002", "Ahmed Al Mansouri", "+971 55 987 6543", "Gulf Motors Trading", "987654321",
              "3450.00", "850.00", "Ras Al Khor Industrial Area, Dubai, UAE",
              "Wholesale customer, bulk orders"),
    _customer(3, "CUST-003", "Sarah Johnson", "+971 52 456 7890", "Quick Fix Garage", "456789123",
              "890.50", "200.00", "Al Ain Industrial Area, Al Ain, UAE",
              "Small garage, frequent small orders"),
    _customer(4, "CUST-004", "Mohammed Hassan", "+971 56 321 0987", "Hassan Auto Parts", "321098765",
              "5670.25", "1200.00", "Sharjah Industrial Area, Sharjah, UAE",
              "Large retailer, monthly payment terms"),
    _customer(5, "CUST-005", "Lisa Chen", "+971 50 789 0123", "Chen Motors", "789012345",
              "2340.00", "0.00", "Abu Dhabi Industrial City, Abu Dhabi, UAE",
              "Specializes in Japanese car parts"),
    _customer(6, "CUST-006", "Omar Al Zaabi", "+971 55 234 5678", None, None,
              "450.00", "0.00", "Jumeirah, Dubai, UAE",
              "Individual customer, occasional purchases"),
]

CUSTOMERS_FALLBACK = StaticFallback("customers", CUSTOMER_RECORDS)

# Only the first three customers are known to the detail route; a backend 404
# is a real answer and is relayed
CUSTOMER_FALLBACK = LookupFallback("customer", CUSTOMER_RECORDS[:3], relay_statuses=frozenset({404}))


# Suppliers

def _supplier(supplier_id: int, code: str, name: str, kind: str, contact: str,
              email: str, address: str, stamp: str) -> Dict[str, Any]:
    return {
        "id": supplier_id,
        "supplier_code": code,
        "name": name,
        "type": kind,
        "contact_person": contact,
        "contact_email": email,
        "contact_number": f"+1-555-010{supplier_id}",
        "address": address,
        "status": True,
        "created_at": stamp,
        "updated_at": stamp,
    }


SUPPLIERS_FALLBACK = PagedFallback("suppliers", [
    _supplier(1, "SUP-001", "ABC Electronics Ltd", "Owner", "John Smith", "john@abcelectronics.com",
              "123 Tech Street, Silicon Valley, CA 94000", "2024-01-15T10:00:00Z"),
    _supplier(2, "SUP-002", "Global Components Inc", "Rental", "Sarah Johnson", "sarah@globalcomponents.com",
              "456 Industrial Blvd, Austin, TX 78701", "2024-01-16T11:30:00Z"),
    _supplier(3, "SUP-003", "Tech Solutions Corp", "Owner", "Mike Davis", "mike@techsolutions.com",
              "789 Innovation Drive, Seattle, WA 98101", "2024-01-17T14:15:00Z"),
    _supplier(4, "SUP-004", "Premium Parts Ltd", "Owner", "Lisa Chen", "lisa@premiumparts.com",
              "321 Quality Lane, Denver, CO 80201", "2024-01-18T09:45:00Z"),
    _supplier(5, "SUP-005", "Reliable Suppliers Co", "Owner", "Robert Wilson", "robert@reliablesuppliers.com",
              "654 Commerce St, Miami, FL 33101", "2024-01-19T16:20:00Z"),
])


# Permissions

def _permission(permission_id: int, name: str, description: str, module: str) -> Dict[str, Any]:
    return {
        "id": permission_id,
        "name": name,
        "slug": name.lower().replace(" ", "_"),
        "description": description,
        "module": module,
        "created_at": _SEEDED,
        "updated_at": _SEEDED,
    }


PERMISSIONS_FALLBACK = StaticFallback("permissions", [
    _permission(1, "View Users", "Can view user list and details", "Users"),
    _permission(2, "Create Users", "Can create new users", "Users"),
    _permission(3, "Edit Users", "Can edit existing users", "Users"),
    _permission(4, "Delete Users", "Can delete users", "Users"),
    _permission(5, "View Roles", "Can view role list and details", "Roles"),
    _permission(6, "Create Roles", "Can create new roles", "Roles"),
    _permission(7, "Edit Roles", "Can edit existing roles", "Roles"),
    _permission(8, "Delete Roles", "Can delete roles", "Roles"),
    _permission(9, "View Permissions", "Can view permission list and details", "Permissions"),
    _permission(10, "Create Permissions", "Can create new permissions", "Permissions"),
    _permission(11, "Edit Permissions", "Can edit existing permissions", "Permissions"),
    _permission(12, "Delete Permissions", "Can delete permissions", "Permissions"),
    _permission(13, "View Inventory", "Can view inventory items", "Inventory"),
    _permission(14, "Manage Inventory", "Can create, edit, and delete inventory items", "Inventory"),
    _permission(15, "View Sales", "Can view sales data and reports", "Sales"),
    _permission(16, "Manage Sales", "Can create and manage sales orders", "Sales"),
])


class PermissionFallback(FallbackProvider):
    """Placeholder permission for any requested id"""

    name = "permission"

    # (highest id, module) by id tier
    MODULE_TIERS = ((4, "Users"), (8, "Roles"), (12, "Permissions"))

    def _module_for(self, permission_id: int) -> str:
        for max_id, module in self.MODULE_TIERS:
            if permission_id <= max_id:
                return module
        return "General"

    def payload(self, path_params, query=None) -> Dict[str, Any]:
        permission_id = int(path_params["id"])
        return {
            "id": permission_id,
            "name": f"Permission {permission_id}",
            "slug": f"permission_{permission_id}",
            "description": f"Description for permission {permission_id}",
            "module": self._module_for(permission_id),
            "created_at": _SEEDED,
            "updated_at": _SEEDED,
        }


PERMISSION_FALLBACK = PermissionFallback()

ROLE_PERMISSIONS_FALLBACK = StaticFallback("role permissions", [
    {"id": 1, "name": "View Dashboard", "module": "Dashboard"},
    {"id": 2, "name": "Manage Users", "module": "Users"},
    {"id": 3, "name": "View Users", "module": "Users"},
    {"id": 4, "name": "Manage Roles", "module": "Roles"},
    {"id": 5, "name": "View Roles", "module": "Roles"},
])


# Users

MAIN_BRANCH = {"id": 1, "branch_name": "Main Branch", "branch_code": "MB001"}
NORTH_BRANCH = {"id": 2, "branch_name": "North Branch", "branch_code": "NB002"}

_SUPPLIER_REFS = {
    1: {"id": 1, "name": "ABC Electronics Ltd", "supplier_code": "SUP001"},
    2: {"id": 2, "name": "Global Components Inc", "supplier_code": "SUP002"},
    3: {"id": 3, "name": "Tech Solutions Corp", "supplier_code": "SUP003"},
    4: {"id": 4, "name": "Premium Parts Ltd", "supplier_code": "SUP004"},
}


def _user(user_id: int, username: str, email: str, full_name: str, role: tuple,
          branches: List[Dict[str, Any]], supplier_ids: List[int], stamp: str) -> Dict[str, Any]:
    role_id, role_name, role_slug, role_description = role
    return {
        "id": user_id,
        "username": username,
        "email": email,
        "full_name": full_name,
        "phone": f"+1-555-000{user_id}",
        "is_active": True,
        "role_id": role_id,
        "role": {"id": role_id, "name": role_name, "slug": role_slug, "description": role_description},
        "branch_ids": [branch["id"] for branch in branches],
        "branches": [dict(branch) for branch in branches],
        "supplier_ids": list(supplier_ids),
        "suppliers": [dict(_SUPPLIER_REFS[supplier_id]) for supplier_id in supplier_ids],
        "created_at": stamp,
        "updated_at": stamp,
    }


USERS_FALLBACK = PagedFallback("users", [
    _user(1, "admin", "admin@company.com", "System Administrator",
          (1, "Administrator", "administrator", "Full system access"),
          [MAIN_BRANCH, NORTH_BRANCH], [1, 2, 3], "2024-01-15T10:00:00Z"),
    _user(2, "manager", "manager@company.com", "Branch Manager",
          (2, "Manager", "manager", "Branch management access"),
          [MAIN_BRANCH], [1, 2], "2024-01-16T11:30:00Z"),
    _user(3, "sales_rep", "sales@company.com", "Sales Representative",
          (3, "Sales Representative", "sales_representative", "Sales and customer management"),
          [MAIN_BRANCH], [], "2024-01-17T14:15:00Z"),
    _user(4, "inventory_clerk", "inventory@company.com", "Inventory Clerk",
          (4, "Inventory Clerk", "inventory_clerk", "Inventory management access"),
          [NORTH_BRANCH], [1, 3, 4], "2024-01-18T09:45:00Z"),
    _user(5, "cashier", "cashier@company.com", "Store Cashier",
          (5, "Cashier", "cashier", "Point of sale access"),
          [MAIN_BRANCH], [], "2024-01-19T16:20:00Z"),
])


class UserFallback(FallbackProvider):
    """Placeholder profile for a single user, derived from the requested id"""

    name = "user"

    # (role id, name, slug, description) by id tier
    ROLE_TIERS = (
        (2, (1, "Administrator", "administrator", "Full system access")),
        (4, (2, "Manager", "manager", "Branch management access")),
    )
    DEFAULT_ROLE = (3, "Sales Representative", "sales_representative", "Sales and customer management")

    def _role_for(self, user_id: int):
        for max_id, role in self.ROLE_TIERS:
            if user_id <= max_id:
                return role
        return self.DEFAULT_ROLE

    def payload(self, path_params, query=None) -> Dict[str, Any]:
        user_id = int(path_params["id"])
        role_id, role_name, role_slug, role_description = self._role_for(user_id)
        branches = [MAIN_BRANCH, NORTH_BRANCH] if role_id == 1 else [MAIN_BRANCH]

        return {
            "id": user_id,
            "username": f"user_{user_id}",
            "email": f"user{user_id}@company.com",
            "full_name": f"User {user_id}",
            "phone": f"+1-555-000{user_id}",
            "is_active": True,
            "role_id": role_id,
            "role": {
                "id": role_id,
                "name": role_name,
                "slug": role_slug,
                "description": role_description,
            },
            "branch_ids": [branch["id"] for branch in branches],
            "branches": [dict(branch) for branch in branches],
            "created_at": _SEEDED,
            "updated_at": _SEEDED,
        }


USER_FALLBACK = UserFallback()
