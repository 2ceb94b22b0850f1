"""
Input validation and normalization utilities
"""
import re
from dataclasses import dataclass
from datetime import datetime

from app.services.errors import ValidationError
from app.utils.date_utils import parse_request_date


DEFAULT_LIMIT = 50
DEFAULT_PAGE = 1
DEFAULT_ORDER_BY = 'first_name'

# Largest value a signed 64-bit database integer holds
MAX_INTEGER = 2 ** 63 - 1

# Decimal integer with an optional sign, nothing else
INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')

# Sort keys accepted in the orderBy query parameter
SORTABLE_COLUMNS = (
    'emp_no',
    'birth_date',
    'first_name',
    'last_name',
    'gender',
    'hire_date',
    'dept_name',
    'department',
)


@dataclass(frozen=True)
class ListingParameters:
    """Normalized parameters for the employee listing"""
    limit: int = DEFAULT_LIMIT
    page: int = DEFAULT_PAGE
    order: str = 'asc'
    order_by: str = DEFAULT_ORDER_BY

    @property
    def offset(self):
        return self.limit * (self.page - 1)


@dataclass(frozen=True)
class EmployeeDepartmentRequest:
    """Assignment request as decoded from the JSON body"""
    emp_no: int
    dept_no: str
    from_date: str = ''
    to_date: str = ''


@dataclass(frozen=True)
class EmployeeDepartmentAssignment:
    """Validated assignment ready for the workflow"""
    emp_no: int
    dept_no: str
    from_date: datetime
    to_date: datetime


def validate_positive_integer(value, default):
    """
    Validate an optional positive integer parameter
    Returns: (is_valid, integer value)
    """
    if value is None or value == '':
        return True, default

    value_str = str(value)
    if not INTEGER_PATTERN.fullmatch(value_str):
        return False, None

    number = int(value_str)
    if number < 1 or number > MAX_INTEGER:
        return False, None

    return True, number


def normalize_order(value):
    """Anything other than a case-insensitive 'desc' sorts ascending"""
    if value and str(value).lower() == 'desc':
        return 'desc'
    return 'asc'


def normalize_order_by(value):
    """
    Resolve the orderBy parameter against the sortable columns
    Returns: (is_valid, sort key)
    """
    if value is None or value == '':
        return True, DEFAULT_ORDER_BY

    key = str(value).strip().lower()
    if key not in SORTABLE_COLUMNS:
        return False, None

    return True, key


def normalize_listing_parameters(args, default_limit=DEFAULT_LIMIT):
    """
    Turn raw listing query parameters into a complete parameter set

    Args:
        args: Mapping of query parameters (request.args)
        default_limit: Page size used when limit is absent

    Returns:
        ListingParameters

    Raises:
        ValidationError: limit, page or orderBy is invalid
    """
    is_valid, limit = validate_positive_integer(args.get('limit'), default_limit)
    if not is_valid:
        raise ValidationError('bad request, wrong limit parameter')

    is_valid, page = validate_positive_integer(args.get('page'), DEFAULT_PAGE)
    if not is_valid or limit * (page - 1) > MAX_INTEGER:
        raise ValidationError('bad request, wrong page parameter')

    is_valid, order_by = normalize_order_by(args.get('orderBy'))
    if not is_valid:
        raise ValidationError('bad request, wrong orderBy parameter')

    return ListingParameters(
        limit=limit,
        page=page,
        order=normalize_order(args.get('order')),
        order_by=order_by,
    )


def validate_dates(from_date_request, to_date_request):
    """
    Parse and cross-check the assignment date range

    to_date is checked before from_date, so it is the one reported when both are bad.

    Returns:
        (from_date, to_date) as UTC datetimes at midnight

    Raises:
        ValidationError: a date is malformed or to_date is before from_date
    """
    to_date = parse_request_date(to_date_request)
    if to_date is None:
        raise ValidationError('bad request, wrong to_date parameter')

    from_date = parse_request_date(from_date_request)
    if from_date is None:
        raise ValidationError('bad request, wrong from_date parameter')

    if to_date < from_date:
        raise ValidationError('bad request, wrong dates range')

    return from_date, to_date


def parse_assignment_request(body) -> EmployeeDepartmentRequest:
    """
    Validate the shape of an assignment request body

    Absent or null fields take their zero value (0 or ''), so a request that
    names no department fails later on the lookup or the dates.

    Raises:
        ValidationError: the body is not an object, or a field has the wrong
            JSON type (emp_no must be an integer, the others strings)
    """
    wrong_body = ValidationError('bad request, wrong request body')

    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise wrong_body

    emp_no = body.get('emp_no')
    if emp_no is None:
        emp_no = 0
    # JSON true/false decode to bool, an int subclass
    if not isinstance(emp_no, int) or isinstance(emp_no, bool):
        raise wrong_body
    if not -MAX_INTEGER - 1 <= emp_no <= MAX_INTEGER:
        raise wrong_body

    fields = {}
    for name in ('dept_no', 'from_date', 'to_date'):
        value = body.get(name)
        if value is None:
            value = ''
        if not isinstance(value, str):
            raise wrong_body
        fields[name] = value

    return EmployeeDepartmentRequest(emp_no=emp_no, **fields)


def build_assignment(request_data: EmployeeDepartmentRequest) -> EmployeeDepartmentAssignment:
    """Validate the dates of a decoded request and build the assignment for the workflow"""
    from_date, to_date = validate_dates(request_data.from_date, request_data.to_date)
    return EmployeeDepartmentAssignment(
        emp_no=request_data.emp_no,
        dept_no=request_data.dept_no,
        from_date=from_date,
        to_date=to_date,
    )
