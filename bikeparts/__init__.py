"""
Bike Parts Resolver

Turns a bike specification into a priced bill of materials, pricing each
component from its vendor product page at request time.

Modules:
    models      - Data models (BikeSpecification, Part, BillOfMaterials)
    common      - Shared utilities (config loader, logging, constants)
    extraction  - Vendor page fetching, extraction profiles, price normalisation
    resolution  - Component rule tables, orchestration, aggregation
"""
