#!/usr/bin/env python3
"""
Quick Demo - See the ledger in action immediately!
Run this file to see a simple demonstration.
"""

import sys
import os

# Add the package to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

try:
    from microgrid_ledger import (
        InsufficientBalance,
        BuyerInactive,
        LedgerValidator,
        MicrogridLedger,
    )

    print("=" * 70)
    print("⚡ MICROGRID LEDGER - QUICK DEMO ⚡")
    print("=" * 70)
    print()

    # Step 1: Create the ledger
    print("📝 Step 1: Creating a ledger owned by 'operator'...")
    ledger = MicrogridLedger(owner="operator", rate=10)
    print(f"   ✅ Credit rate: {ledger.rate} credits per energy unit")
    print()

    # Step 2: Register nodes
    print("🏠 Step 2: Registering nodes...")
    for identity, name in [("alice", "Alice's Rooftop PV"), ("bob", "Bob's Household")]:
        node = ledger.register_node(identity, name)
        print(f"   ✅ {node.identity}: {node.name}")
    print()

    # Step 3: Record production
    print("☀️  Step 3: Alice reports 5 units of production...")
    credits = ledger.record_production("alice", 5)
    print(f"   ✅ Minted {credits} credits")
    print(f"   💰 Alice balance: {ledger.get_node('alice').credit_balance}")
    print()

    # Step 4: Trade
    print("🔄 Step 4: Alice sells 2 units to Bob...")
    tx_id = ledger.trade("alice", "bob", 2)
    tx = ledger.get_transaction(tx_id)
    print(f"   ✅ Transaction {tx.transaction_id}: {tx.energy_amount} units for {tx.credit_amount} credits")
    print(f"   💰 Alice: {ledger.get_node('alice').credit_balance}  Bob: {ledger.get_node('bob').credit_balance}")
    print()

    # Step 5: Rejections
    print("🚫 Step 5: Rejected trades leave the ledger untouched...")
    try:
        ledger.trade("alice", "bob", 10)
    except InsufficientBalance as e:
        print(f"   ⛔ {e.kind.value}: {e}")
    ledger.set_active("operator", "bob", False)
    try:
        ledger.trade("alice", "bob", 1)
    except BuyerInactive as e:
        print(f"   ⛔ {e.kind.value}: {e}")
    ledger.set_active("operator", "bob", True)
    print()

    # Step 6: Statistics
    print("📊 Step 6: Ledger Statistics:")
    stats = ledger.get_stats()
    print(f"   🏠 Nodes: {stats.node_count}")
    print(f"   💰 Total credits: {stats.total_credits}")
    print(f"   📦 Transactions: {stats.transaction_count}")
    print()

    # Step 7: Validate
    print("🔍 Step 7: Validating conservation...")
    validation = LedgerValidator().validate(ledger)
    print(f"   ✅ Validation: {'PASSED' if validation['valid'] else 'FAILED'}")
    print()

    print("=" * 70)
    print("🎉 DEMO COMPLETE! 🎉")
    print("=" * 70)
    print()
    print("💡 Next steps:")
    print("   1. Start API: 'python -m microgrid_ledger.api'")
    print("   2. Visit http://localhost:8000/docs for API documentation")
    print()

except ImportError as e:
    print("❌ Error: Missing dependencies")
    print(f"   {e}")
    print()
    print("💡 Solution: Install dependencies with:")
    print("   pip install -r requirements.txt")
    print()
    sys.exit(1)
