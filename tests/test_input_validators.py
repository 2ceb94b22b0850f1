"""
Tests for listing parameter normalization and assignment request validation
"""
import pytest
from datetime import datetime
import pytz
from app.services.errors import ValidationError, ErrorKind
from app.utils.input_validators import (
    ListingParameters,
    EmployeeDepartmentRequest,
    normalize_listing_parameters,
    validate_positive_integer,
    normalize_order,
    normalize_order_by,
    validate_dates,
    parse_assignment_request,
    build_assignment
)


class TestListingParameters:
    """Test suite for the employee listing query parameters"""

    def test_defaults_when_parameters_are_absent(self):
        """Test that limit, page, order and orderBy fall back to their defaults"""
        parameters = normalize_listing_parameters({})

        assert parameters == ListingParameters(limit=50, page=1, order='asc', order_by='first_name')
        assert parameters.offset == 0

    def test_empty_parameters_use_defaults(self):
        """Test that empty strings behave like missing parameters"""
        parameters = normalize_listing_parameters({'limit': '', 'page': '', 'order': '', 'orderBy': ''})

        assert parameters.limit == 50
        assert parameters.page == 1
        assert parameters.order == 'asc'
        assert parameters.order_by == 'first_name'

    def test_default_limit_can_be_configured(self):
        """Test that the caller-supplied default page size is used"""
        assert normalize_listing_parameters({}, default_limit=25).limit == 25

    @pytest.mark.parametrize('limit', ['abc', '0', '-1', '1.5', '1e3', ' 5', '5 ', '٣'])
    def test_wrong_limit_is_rejected(self, limit):
        """Test that a limit that is not a positive integer is a validation error"""
        with pytest.raises(ValidationError) as exc_info:
            normalize_listing_parameters({'limit': limit})

        assert exc_info.value.message == 'bad request, wrong limit parameter'
        assert exc_info.value.kind == ErrorKind.VALIDATION

    @pytest.mark.parametrize('page', ['abc', '0', '-3', '2.0', 'first'])
    def test_wrong_page_is_rejected(self, page):
        """Test that a page that is not a positive integer is a validation error"""
        with pytest.raises(ValidationError) as exc_info:
            normalize_listing_parameters({'page': page})

        assert exc_info.value.message == 'bad request, wrong page parameter'

    def test_limit_is_checked_before_page(self):
        """Test that a bad limit is reported even when the page is also bad"""
        with pytest.raises(ValidationError) as exc_info:
            normalize_listing_parameters({'limit': 'x', 'page': 'y'})

        assert exc_info.value.message == 'bad request, wrong limit parameter'

    @pytest.mark.parametrize('limit,page,offset', [
        (1, 1, 0),
        (5, 1, 0),
        (5, 2, 5),
        (50, 3, 100),
        (7, 10, 63),
    ])
    def test_offset_is_derived_from_limit_and_page(self, limit, page, offset):
        """Test that offset = limit * (page - 1)"""
        parameters = normalize_listing_parameters({'limit': str(limit), 'page': str(page)})

        assert parameters.offset == offset

    def test_largest_limit_is_accepted(self):
        """Test that limit may reach the signed 64-bit maximum"""
        parameters = normalize_listing_parameters({'limit': '9223372036854775807'})

        assert parameters.limit == 2 ** 63 - 1
        assert parameters.offset == 0

    @pytest.mark.parametrize('limit', ['9223372036854775808', '99999999999999999999'])
    def test_limit_beyond_integer_range_is_rejected(self, limit):
        with pytest.raises(ValidationError) as exc_info:
            normalize_listing_parameters({'limit': limit})

        assert exc_info.value.message == 'bad request, wrong limit parameter'

    @pytest.mark.parametrize('args', [
        {'page': '9223372036854775808'},
        {'limit': '50', 'page': '9223372036854775807'},
        {'limit': '9223372036854775807', 'page': '3'},
    ])
    def test_page_whose_offset_overflows_is_rejected(self, args):
        """Test that a page is rejected when limit * (page - 1) leaves the 64-bit range"""
        with pytest.raises(ValidationError) as exc_info:
            normalize_listing_parameters(args)

        assert exc_info.value.message == 'bad request, wrong page parameter'

    def test_signed_and_zero_padded_integers_are_accepted(self):
        """Test decimal integers with a sign or leading zeros"""
        assert validate_positive_integer('+5', 50) == (True, 5)
        assert validate_positive_integer('007', 50) == (True, 7)

    @pytest.mark.parametrize('order,expected', [
        ('desc', 'desc'),
        ('DESC', 'desc'),
        ('Desc', 'desc'),
        ('asc', 'asc'),
        ('ASC', 'asc'),
        ('descending', 'asc'),
        ('random', 'asc'),
        (None, 'asc'),
    ])
    def test_order_normalization(self, order, expected):
        """Test that only a case-insensitive 'desc' sorts descending"""
        assert normalize_order(order) == expected

    @pytest.mark.parametrize('order_by,expected', [
        ('emp_no', 'emp_no'),
        ('EMP_NO', 'emp_no'),
        ('First_Name', 'first_name'),
        ('hire_date', 'hire_date'),
        ('department', 'department'),
        ('dept_name', 'dept_name'),
    ])
    def test_order_by_is_case_insensitive(self, order_by, expected):
        """Test that known sort keys are accepted in any case"""
        assert normalize_order_by(order_by) == (True, expected)

    @pytest.mark.parametrize('order_by', ['salary', 'emp_no; DROP TABLE employees', '1', 'e.emp_no'])
    def test_unknown_order_by_is_rejected(self, order_by):
        """Test that sort keys outside the sortable columns never reach the query"""
        with pytest.raises(ValidationError) as exc_info:
            normalize_listing_parameters({'orderBy': order_by})

        assert exc_info.value.message == 'bad request, wrong orderBy parameter'


class TestValidateDates:
    """Test suite for assignment date validation"""

    def test_valid_range(self):
        """Test that a valid range comes back as UTC midnights"""
        from_date, to_date = validate_dates('1996-08-04', '1996-08-09')

        assert from_date == pytz.UTC.localize(datetime(1996, 8, 4))
        assert to_date == pytz.UTC.localize(datetime(1996, 8, 9))
        assert from_date.hour == 0 and from_date.minute == 0 and from_date.second == 0

    def test_same_day_range_is_accepted(self):
        """Test that from_date == to_date is a valid range"""
        from_date, to_date = validate_dates('2020-01-01', '2020-01-01')

        assert from_date == to_date

    def test_to_date_before_from_date_is_rejected(self):
        """Test that an inverted range is a validation error"""
        with pytest.raises(ValidationError) as exc_info:
            validate_dates('1996-08-04', '1996-08-03')

        assert exc_info.value.message == 'bad request, wrong dates range'

    @pytest.mark.parametrize('to_date', ['', '1996/08/09', '1996-13-01', '1996-02-30', '96-08-09', '1996-8-9'])
    def test_wrong_to_date(self, to_date):
        """Test that a malformed to_date is reported"""
        with pytest.raises(ValidationError) as exc_info:
            validate_dates('1996-08-04', to_date)

        assert exc_info.value.message == 'bad request, wrong to_date parameter'

    @pytest.mark.parametrize('from_date', ['', 'yesterday', '1996-00-10', '1996-08-04T00:00:00'])
    def test_wrong_from_date(self, from_date):
        """Test that a malformed from_date is reported"""
        with pytest.raises(ValidationError) as exc_info:
            validate_dates(from_date, '1996-08-09')

        assert exc_info.value.message == 'bad request, wrong from_date parameter'

    def test_to_date_error_takes_precedence(self):
        """Test that to_date is checked first when both dates are malformed"""
        with pytest.raises(ValidationError) as exc_info:
            validate_dates('not-a-date', 'also-not-a-date')

        assert exc_info.value.message == 'bad request, wrong to_date parameter'


class TestAssignmentRequest:
    """Test suite for the assignment request body"""

    def test_valid_body(self):
        """Test that a well-formed body is decoded"""
        request_data = parse_assignment_request({
            'emp_no': 10002,
            'dept_no': 'd006',
            'from_date': '1996-08-04',
            'to_date': '1996-08-09'
        })

        assert request_data == EmployeeDepartmentRequest(
            emp_no=10002,
            dept_no='d006',
            from_date='1996-08-04',
            to_date='1996-08-09'
        )

    @pytest.mark.parametrize('body', [
        'wrong body',
        ['emp_no', 10002],
        {'emp_no': '10002', 'dept_no': 'd006'},
        {'emp_no': True, 'dept_no': 'd006'},
        {'emp_no': 10002.5, 'dept_no': 'd006'},
        {'emp_no': 2 ** 63, 'dept_no': 'd006'},
        {'emp_no': 10002, 'dept_no': 6},
        {'emp_no': 10002, 'dept_no': 'd006', 'from_date': 19960804, 'to_date': '1996-08-09'},
    ])
    def test_wrong_body(self, body):
        """Test that bodies of the wrong shape are rejected"""
        with pytest.raises(ValidationError) as exc_info:
            parse_assignment_request(body)

        assert exc_info.value.message == 'bad request, wrong request body'

    @pytest.mark.parametrize('body', [None, {}, {'emp_no': None, 'dept_no': None, 'from_date': None}])
    def test_absent_fields_take_zero_values(self, body):
        """Test that missing or null fields decode as 0 and empty strings"""
        assert parse_assignment_request(body) == EmployeeDepartmentRequest(
            emp_no=0,
            dept_no='',
            from_date='',
            to_date=''
        )

    def test_missing_department_decodes_as_empty(self):
        request_data = parse_assignment_request({
            'emp_no': 10002,
            'from_date': '1996-08-04',
            'to_date': '1996-08-09'
        })

        assert request_data.emp_no == 10002
        assert request_data.dept_no == ''

    def test_missing_dates_fail_date_validation(self):
        """Test that absent dates decode as empty and then fail as a bad to_date"""
        request_data = parse_assignment_request({'emp_no': 10002, 'dept_no': 'd006'})

        with pytest.raises(ValidationError) as exc_info:
            build_assignment(request_data)

        assert exc_info.value.message == 'bad request, wrong to_date parameter'

    def test_build_assignment(self):
        """Test that a decoded request becomes an assignment with parsed dates"""
        assignment = build_assignment(EmployeeDepartmentRequest(
            emp_no=10002,
            dept_no='d006',
            from_date='1996-08-04',
            to_date='1996-08-09'
        ))

        assert assignment.emp_no == 10002
        assert assignment.dept_no == 'd006'
        assert assignment.from_date.date().isoformat() == '1996-08-04'
        assert assignment.to_date.date().isoformat() == '1996-08-09'
