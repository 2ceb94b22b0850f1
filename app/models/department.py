from app import db


class Department(db.Model):
    """Department model, identified by its code (e.g. d005)"""
    __tablename__ = 'departments'

    dept_no = db.Column(db.String(4), primary_key=True)
    dept_name = db.Column(db.String(40), nullable=False, unique=True)

    def __repr__(self):
        return f'<Department {self.dept_no}: {self.dept_name}>'
