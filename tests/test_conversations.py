from sqlalchemy import func, select

from app.modules.conversations.models import Conversation


async def test_support_conversation_is_created_once(client, db, make_user, login):
    user = await make_user()
    headers = await login(user.email)

    r = await client.post("/api/v1/conversations/support", headers=headers)
    assert r.status_code == 200
    conv = r.json()
    assert conv["title"] == "Equipe AgriLink"
    assert conv["last_message"] == "Bem-vindo ao suporte do AgriLink!"
    assert conv["participant_id"] is None

    r = await client.post("/api/v1/conversations/support", headers=headers)
    assert r.json()["id"] == conv["id"]
    assert (await db.execute(select(func.count(Conversation.id)))).scalar_one() == 1


async def test_direct_conversation_is_shared_by_both_sides(client, make_user, login):
    buyer = await make_user()
    farmer = await make_user(email="produtor@agrilink.ao", user_type="agricultor", full_name="João Agricultor")

    r = await client.post("/api/v1/conversations", json={"participant_id": farmer.id}, headers=await login(buyer.email))
    assert r.status_code == 201
    assert r.json()["title"] == "João Agricultor"
    conv_id = r.json()["id"]

    # o outro lado reabre a mesma conversa
    r = await client.post("/api/v1/conversations", json={"participant_id": buyer.id}, headers=await login(farmer.email))
    assert r.status_code == 200
    assert r.json()["id"] == conv_id

    r = await client.post("/api/v1/conversations", json={"participant_id": buyer.id}, headers=await login(buyer.email))
    assert r.status_code == 400
    r = await client.post("/api/v1/conversations", json={"participant_id": "nao-existe"},
                          headers=await login(buyer.email))
    assert r.status_code == 404


async def test_messages_are_ordered_and_update_the_preview(client, make_user, login):
    buyer = await make_user()
    farmer = await make_user(email="produtor@agrilink.ao", user_type="agricultor")
    buyer_headers = await login(buyer.email)
    farmer_headers = await login(farmer.email)
    conv_id = (await client.post("/api/v1/conversations", json={"participant_id": farmer.id},
                                 headers=buyer_headers)).json()["id"]

    r = await client.post(f"/api/v1/conversations/{conv_id}/messages", json={"content": "  Tem milho?  "},
                          headers=buyer_headers)
    assert r.status_code == 201
    assert r.json()["content"] == "Tem milho?"
    await client.post(f"/api/v1/conversations/{conv_id}/messages", json={"content": "Sim, 500 kg."},
                      headers=farmer_headers)

    r = await client.get(f"/api/v1/conversations/{conv_id}/messages", headers=farmer_headers)
    assert [m["content"] for m in r.json()] == ["Tem milho?", "Sim, 500 kg."]
    assert [m["sender_id"] for m in r.json()] == [buyer.id, farmer.id]

    r = await client.get("/api/v1/conversations", headers=buyer_headers)
    assert len(r.json()) == 1
    assert r.json()[0]["last_message"] == "Sim, 500 kg."
    assert r.json()[0]["last_timestamp"] is not None

    r = await client.post(f"/api/v1/conversations/{conv_id}/messages", json={"content": "   "},
                          headers=buyer_headers)
    assert r.status_code == 422


async def test_outsiders_cannot_read_a_conversation(client, make_user, login):
    buyer = await make_user()
    farmer = await make_user(email="produtor@agrilink.ao", user_type="agricultor")
    outsider = await make_user(email="curioso@agrilink.ao")
    conv_id = (await client.post("/api/v1/conversations", json={"participant_id": farmer.id},
                                 headers=await login(buyer.email))).json()["id"]

    headers = await login(outsider.email)
    r = await client.get(f"/api/v1/conversations/{conv_id}/messages", headers=headers)
    assert r.status_code == 404
    r = await client.post(f"/api/v1/conversations/{conv_id}/messages", json={"content": "oi"}, headers=headers)
    assert r.status_code == 404
    r = await client.get("/api/v1/conversations", headers=headers)
    assert r.json() == []


async def test_support_staff_reads_support_conversations(client, make_user, login):
    user = await make_user()
    agent = await make_user(email="suporte@agrilink.ao", admin_role="support")
    conv_id = (await client.post("/api/v1/conversations/support", headers=await login(user.email))).json()["id"]

    agent_headers = await login(agent.email)
    r = await client.post(f"/api/v1/conversations/{conv_id}/messages", json={"content": "Como posso ajudar?"},
                          headers=agent_headers)
    assert r.status_code == 201
    r = await client.get(f"/api/v1/conversations/{conv_id}", headers=agent_headers)
    assert r.json()["last_message"] == "Como posso ajudar?"
