"""
SLC Tag Importer - RSLogix 500 symbol CSV import into a node namespace.

Reads the symbol table exported from RSLogix 500 (SLC 500 / MicroLogix
controllers) and creates typed variables under a communication driver
station's ``Tags`` folder, grouped into one folder per data file
(``BoolFile``, ``IntegerFile``, ``TimerFile``, ...).

Core Design Principle:
    Import is append-only and per-record.  One bad line is reported and
    skipped; it never aborts the run.  A tag that already exists in its
    destination folder is left alone, so re-running an import is safe.

Usage:
    from slc_tag_importer import XmlNamespace, ImportRunner

    # Load (or build) the target namespace
    namespace = XmlNamespace.load('path/to/namespace.xml')

    # Run the import synchronously
    summary = ImportRunner(namespace).run(
        'path/to/symbols.csv', 'MicroController1', 'Station1')
    print(summary.imported_count)

    # Or in the background, driven by settings
    from slc_tag_importer import TagImporter, load_settings
    importer = TagImporter(namespace, load_settings('importer.json'))
    importer.import_tags_from_csv()
    importer.wait()

    # Persist the namespace
    namespace.write('path/to/namespace.xml')
"""

__version__ = '0.1.0'


def __getattr__(name):
    """Lazy import so the optional MCP extra is never pulled in eagerly."""
    if name == 'XmlNamespace':
        from .namespace import XmlNamespace
        return XmlNamespace
    if name in ('ImportRunner', 'ImportPreconditionError', 'import_record'):
        from . import importer
        return getattr(importer, name)
    if name in ('TagImporter', 'LongRunningTask'):
        from . import task
        return getattr(task, name)
    if name in ('ImporterSettings', 'load_settings'):
        from . import config
        return getattr(config, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'XmlNamespace',
    'ImportRunner',
    'ImportPreconditionError',
    'import_record',
    'TagImporter',
    'LongRunningTask',
    'ImporterSettings',
    'load_settings',
]
