"""
Business logic services for TillTrack application.

Import services from their modules, e.g.
``from tilltrack.services.cart_ledger import CartLedger``. The models
package depends on :mod:`tilltrack.services.tax`, so this package does not
import its submodules eagerly.
"""
