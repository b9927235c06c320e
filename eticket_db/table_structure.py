from dataclasses import dataclass, field

import sqlparse


def compact_sql(sql_statement):
    """Strip comments and collapse whitespace so a statement fits on one line"""
    return sqlparse.format(
        sql_statement, strip_comments=True, strip_whitespace=True,
    ).strip()


@dataclass
class TableField:
    name: str = ''
    field_type: str = ''
    parameters: str = ''

    def render(self):
        return f'{self.name} {self.field_type} {self.parameters}'.rstrip()


@dataclass
class ForeignKey:
    name: str
    columns: list[str]
    ref_table: str
    ref_columns: list[str]

    def render(self):
        return (
            f'CONSTRAINT {self.name} FOREIGN KEY ({", ".join(self.columns)}) '
            f'REFERENCES {self.ref_table} ({", ".join(self.ref_columns)})'
        )


@dataclass
class UniqueKey:
    name: str
    columns: list[str]

    def render(self):
        return f'CONSTRAINT {self.name} UNIQUE ({", ".join(self.columns)})'


@dataclass
class CheckConstraint:
    name: str
    expression: str

    def render(self):
        return f'CONSTRAINT {self.name} CHECK ({self.expression})'


@dataclass
class TableStructure:
    name: str = ''
    fields: list[TableField] = field(default_factory=list)
    primary_key: str = ''
    foreign_keys: list[ForeignKey] = field(default_factory=list)
    unique_keys: list[UniqueKey] = field(default_factory=list)
    checks: list[CheckConstraint] = field(default_factory=list)

    def field_names(self):
        return [f.name for f in self.fields]

    def referenced_tables(self):
        return [fk.ref_table for fk in self.foreign_keys]

    def create_statement(self):
        lines = [f.render() for f in self.fields]
        lines.append(f'PRIMARY KEY ({self.primary_key})')
        for constraint in [*self.foreign_keys, *self.unique_keys, *self.checks]:
            lines.append(constraint.render())
        body = ',\n    '.join(lines)
        return f'CREATE TABLE {self.name} (\n    {body}\n)'

    def drop_statement(self):
        return f'DROP TABLE {self.name}'
