from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


class Technician(db.Model):
    __tablename__ = 'technicians'
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=False)
    # 'admin' or 'technician'; NULL rows are treated as technicians
    role = db.Column(db.String(32), default='technician')
    technician_code = db.Column(db.String(32), nullable=True)

    def __repr__(self):
        return f'<Technician {self.email} ({self.role})>'
